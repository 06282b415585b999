"""Web Layer - Flask Blueprints, Middleware"""
