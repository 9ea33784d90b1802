"""
Recipe finder core.

- search: ingredient search aggregation (search_recipes)
- details: recipe detail fetching and normalization
- state: caller-facing finder state with stale-result discarding
- connectors: upstream recipe service clients
"""
