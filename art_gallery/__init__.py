"""Virtual Art Gallery: browse the Harvard Art Museums collection."""
