"""Expose HomeKit devices managed by Homebridge to an OpenClaw agent."""

__version__ = "2.2.0"
