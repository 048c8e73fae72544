"""Server-rendered issue pages."""
