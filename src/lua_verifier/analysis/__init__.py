"""
Static Analysis Package.

Modules:
    - ``scope_store``: Nested lexical scopes with defined/used sets.
    - ``names``: Resolution of identifiers and member chains to name strings.
    - ``verifier``: The tree walk recording definitions, uses and findings.
"""
