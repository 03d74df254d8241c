"""
Sales Insights Dashboard
"""
