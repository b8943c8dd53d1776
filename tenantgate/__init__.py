"""
tenantgate - multi-tenant access control and quota core.
"""
