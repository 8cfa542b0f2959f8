"""
Search, recommendation and listing health engines
"""
