"""Core forwarding flow: envelope unwrapping, filtering, mapping, forwarding."""
