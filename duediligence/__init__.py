"""
Due diligence backend.

Contains the FastAPI application plus the orchestrator that fans a company
name out into three web-search-backed OpenAI queries.
"""
