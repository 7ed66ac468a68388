"""Small text helpers shared across modules."""
