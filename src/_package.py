"""Package metadata shared by the CLI and the namespace package."""

PACKAGE_NAME = "asg-terminator"
DESCRIPTION = "Terminates out-of-date or surplus instances in AWS Auto Scaling Groups"

__version__ = "0.3.0"
