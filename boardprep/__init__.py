"""boardprep — guided provisioning for embedded board development hosts."""

__version__ = "0.1.0"
