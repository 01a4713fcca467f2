"""OGW SDK - SOAP templating, response extraction and shared utilities."""
