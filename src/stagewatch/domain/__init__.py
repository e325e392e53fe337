"""Domain layer: stage vocabulary, reconciliation core and ports."""
