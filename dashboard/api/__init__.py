"""
Matching API routers
"""
