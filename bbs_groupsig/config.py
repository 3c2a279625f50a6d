"""
Group signature configuration.
Values come from the environment and fall back to the defaults below.
"""

import os

# Pairing curve used by setup_group()
DEFAULT_CURVE = os.getenv('GROUPSIG_CURVE', 'MNT224')

# Number of issuance attempts before DegenerateCredentialError is raised
ISSUE_MAX_ATTEMPTS = int(os.getenv('GROUPSIG_ISSUE_MAX_ATTEMPTS', 3))

# Only read by the demo; library modules never configure logging
LOG_LEVEL = os.getenv('GROUPSIG_LOG_LEVEL', 'INFO').upper()


class Config:
    """Configuration holder."""

    def __init__(self):
        self.curve = DEFAULT_CURVE
        self.issue_max_attempts = ISSUE_MAX_ATTEMPTS
        self.log_level = LOG_LEVEL

        if self.issue_max_attempts < 1:
            raise ValueError(
                f"GROUPSIG_ISSUE_MAX_ATTEMPTS must be at least 1, got {self.issue_max_attempts}"
            )


# Global configuration instance
config = Config()
