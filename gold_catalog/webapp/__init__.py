"""
FastAPI web application for the Gold Catalog API.
"""
