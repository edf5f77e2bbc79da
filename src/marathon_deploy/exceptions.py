"""
Exceptions.
"""


class MarathonDeployError(Exception):
    def __init__(self, reason):
        super(MarathonDeployError, self).__init__(reason)
        self.reason = reason

    def __str__(self):
        return str(self.reason)


class ConfigurationError(MarathonDeployError):
    pass


class ManifestError(MarathonDeployError):
    def __init__(self, reason, filename=None):
        super(ManifestError, self).__init__(reason)
        self.filename = filename


class ManifestNotFoundError(ManifestError, FileNotFoundError):
    def __init__(self, filename):
        super(ManifestNotFoundError, self).__init__(
            "Could not find file '%s'" % filename, filename)


class MalformedManifestError(ManifestError):
    pass


class MissingIdentifierError(MarathonDeployError):
    pass


class AbortException(MarathonDeployError):
    pass
