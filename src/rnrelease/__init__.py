"""rnrelease - semver bump and platform version sync for React Native apps"""

__version__ = "0.1.0"
