# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Order store configuration and connection management
- security: API key extraction and verification
"""
