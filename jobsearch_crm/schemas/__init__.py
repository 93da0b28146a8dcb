"""
Request schemas (pydantic) for the API blueprints.
"""
