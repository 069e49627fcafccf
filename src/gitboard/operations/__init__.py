"""Pure planning operations: preview, squash messages, steps, drag classification."""
