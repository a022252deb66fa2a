"""
Admin accounts: setup, profile and the one-time code login flow.
"""
