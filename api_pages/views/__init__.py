"""View rendering for API-driven pages.

Views prepare template context from fetched content and render Jinja2
templates; routers only wire requests to them.
"""
