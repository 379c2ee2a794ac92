"""Runtime services (telemetry) shared by the buffer and encoding layers."""
