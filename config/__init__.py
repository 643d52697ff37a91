"""
Django project configuration for the retail back office.
"""
