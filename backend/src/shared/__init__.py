"""Shared configuration and OpenTelemetry setup."""
