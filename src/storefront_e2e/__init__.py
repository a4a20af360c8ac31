"""
Storefront E2E - dynamic product selection and resilient interaction
for browser tests against an e-commerce storefront
"""

__version__ = '0.1.0'
