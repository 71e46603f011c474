# -*- coding: utf-8 -*-


class ProfileError(ValueError):
    """Base class for every error raised while converting a profile"""


class ProfileStructureError(ProfileError):
    """
    A structural precondition of the profile is not met
    (missing <XMLProfile>, <JSONProfile> or <DataElements>).
    Nothing is written when this is raised.
    """


class MergeConflictError(ProfileError):
    """Same-named siblings declare different structures (strict merge mode only)"""

    def __init__(self, name, count):
        self.name = name
        self.count = count
        super().__init__(f"{count} declarations of <{name}> differ in structure")


class ConfigError(ValueError):
    """Invalid configuration file or value"""
