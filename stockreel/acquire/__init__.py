"""Clip acquisition and caching.

Modules:
    base          - SearchProvider protocol
    resolution    - Aspect-ratio targets and tolerant resolution matching
    providers     - Catalog search implementations (Pexels)
    dedup         - Cross-term URL deduplication
    cache         - Content-addressed download cache
    library       - Local clip library scanner
    orchestrator  - Duration-budgeted acquisition pipeline
    errors        - Exception types
"""
