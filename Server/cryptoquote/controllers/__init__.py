"""
Controllers Package

Contains the Flask blueprints for the HTTP endpoints.
"""
