"""URL helpers shared by the crawler components"""
