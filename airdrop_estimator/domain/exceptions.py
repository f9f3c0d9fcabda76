"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PriceFeedError(DomainException):
    """Price API returned an error, timed out or sent an unusable payload"""

    pass


class RuleConfigurationError(DomainException):
    """Scoring configuration is malformed (unknown rule type, bad tiers, missing fields)"""

    pass
