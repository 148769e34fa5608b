"""monolink core: configuration, utilities and the workspace linking engine."""
