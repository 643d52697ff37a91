"""
Sales app for the retail back office.

Order fulfillment, order retrieval and the order status workflow.
"""
