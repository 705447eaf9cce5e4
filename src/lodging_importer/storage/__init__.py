"""Output sinks for mapped accommodations."""
