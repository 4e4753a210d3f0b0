"""Sample DTOs, handlers and routes used by the test suite."""
