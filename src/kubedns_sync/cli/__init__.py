"""
CLI tools for kubedns-sync.

Entry points:
    - kubedns-sync: Keep the DNS configuration in sync with its source
    - kubedns-sync-validate: Validate a configuration directory or file
"""
