"""Domain layer: holdings and market snapshots."""
