"""
Hoops Dynasty HTTP API
"""
