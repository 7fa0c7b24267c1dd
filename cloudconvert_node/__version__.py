# cloudconvert_node/__version__.py
"""
Version information for the CloudConvert pipeline node.

The version follows semantic versioning: MAJOR.MINOR.PATCH

- MAJOR: Incompatible API changes
- MINOR: Add functionality in a backward compatible manner
- PATCH: Backward compatible bug fixes
"""

__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Additional version metadata
__author__ = "CloudConvert Node Contributors"
__email__ = ""
__license__ = "Licence LGPL 3.0"
__description__ = "CloudConvert pipeline node - remote file conversion jobs as a workflow step"
