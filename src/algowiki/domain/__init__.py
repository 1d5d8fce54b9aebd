"""Domain layer: taxonomy model, reconciliation rules and the rebuild cycle."""
