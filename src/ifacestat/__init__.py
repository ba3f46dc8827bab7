"""ifacestat - /proc/net/dev network interface collector plugin."""

__version__ = "0.1.0"
