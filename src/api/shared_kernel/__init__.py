"""Shared Kernel module.

Components every bounded context may depend on. Currently holds the
observation context carried by domain probes across the infrastructure and
tenancy layers.
"""
