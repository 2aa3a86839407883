"""
models/ - pydantic models for survey inputs and derived results
"""
