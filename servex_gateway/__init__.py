"""
ServeX gateway: backend-for-frontend for the restaurant ordering client.
"""
