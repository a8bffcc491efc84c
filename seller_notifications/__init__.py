"""Seller dashboard notifications: access layer, change feed and surfaces."""
