"""
routers/ - FastAPI routers
"""
