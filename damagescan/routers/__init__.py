"""HTTP routes. Thin adapters over the estimating engine."""
