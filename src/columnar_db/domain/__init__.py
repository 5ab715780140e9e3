"""Domain layer: values, tables, the catalog and the error taxonomy."""
