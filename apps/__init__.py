"""
Django apps for the retail back office.
"""
