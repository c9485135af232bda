"""Plugin-side helpers for the Combat Logger overlay."""
