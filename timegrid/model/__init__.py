"""Grid-side data consumed by the interaction handlers."""
