"""Sales dashboard: daily sales/volume proxy over an upstream e-commerce API."""
