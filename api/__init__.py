"""HTTP API blueprints for the n-gram drill."""
