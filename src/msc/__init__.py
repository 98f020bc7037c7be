"""msc - Interactive Minecraft server configurator"""

__version__ = "0.1.0"
__description__ = "Interactive Minecraft server configurator"

__all__ = ["Machine", "__version__"]


def __getattr__(name: str):
    """Lazy import so importing the package does not pull in the core eagerly."""
    if name == "Machine":
        from .core.state_machine import Machine

        return Machine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
