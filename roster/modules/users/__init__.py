"""
User Management Module

User management system with clear separation of concerns:
- domain: Domain models, errors and validation rules
- repositories: In-memory data access
- services: Business logic
- api: REST API endpoints and error translation
"""
