"""Tool-specific service packages.

Synopsis:
Namespace package for service modules that are scoped to individual pool tools.

Glossary:
- Tool-scoped service: Business logic package dedicated to one public tool flow.
"""
