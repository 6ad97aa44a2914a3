"""
News Admin - Administrative client for the news aggregation backend.
"""
