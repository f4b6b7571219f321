"""Aircraft fleet catalog: entity model, variant factory, storage and queries."""
