"""HTTP routers for the relay endpoints"""
