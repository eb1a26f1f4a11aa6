"""
cloudops_credentials.api.routers

Route modules grouped by resource (health, projects, targets, tokens).
"""
