"""pagemd custom exceptions.

The detector, converter and matcher never raise for bad input; these are
raised at the edges (profile storage, explicit profile lookups, pipeline
configuration).
"""


class PageMDError(Exception):
    """Base exception for all pagemd errors."""


class ProfileError(PageMDError):
    """Errors related to conversion profiles."""


class ProfileNotFoundError(ProfileError):
    """A profile id was requested that is not in the collection."""


class ProfileLoadError(ProfileError):
    """The profile collection could not be read or is invalid."""


class NamingTemplateError(PageMDError):
    """The configured custom file naming template is invalid."""
