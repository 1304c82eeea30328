"""Core — framework-free building blocks: errors, naming, shared configuration."""
