"""Application layer: clock services and the ports they depend on."""
