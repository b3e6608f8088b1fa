"""
Route tables for the API module.
"""
