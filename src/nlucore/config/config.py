"""
nlucore Configuration

Centralized configuration for the classifier and the entity extractor.
All settings can be overridden via environment variables.
"""
import os
from typing import Optional


class NluConfig:
    """
    Central configuration for nlucore.

    All settings have sensible defaults and can be overridden via environment variables.
    Explicit settings passed to a classifier or extractor constructor always win.

    Example:
        >>> from nlucore.config import config
        >>> print(config.NER_THRESHOLD)
        0.5

        # Override via environment:
        >>> os.environ["NLU_NER_THRESHOLD"] = "0.8"
        >>> config = NluConfig()  # Reload
        >>> print(config.NER_THRESHOLD)
        0.8
    """

    def __init__(self):
        # ====================================================================
        # Logistic Regression Training
        # ====================================================================

        self.LR_LEARNING_RATE: float = float(
            os.getenv("NLU_LR_LEARNING_RATE", "1.0"))
        """Initial gradient descent step size (halved whenever the loss goes up)"""

        self.LR_REGULARIZATION: float = float(
            os.getenv("NLU_LR_REGULARIZATION", "0.01"))
        """L2 regularization strength (lambda); 0 disables it"""

        self.LR_MAX_ITERATIONS: int = int(
            os.getenv("NLU_LR_MAX_ITERATIONS", "20000"))
        """Hard cap on gradient descent iterations per train() call"""

        self.LR_TOLERANCE: float = float(os.getenv("NLU_LR_TOLERANCE", "1e-8"))
        """Stop when the loss improves by less than this between iterations"""

        # ====================================================================
        # Fuzzy Entity Extraction
        # ====================================================================

        self.NER_THRESHOLD: float = float(os.getenv("NLU_NER_THRESHOLD", "0.5"))
        """Minimum accuracy (0-1) for a fuzzy occurrence to be reported"""

        self.NER_WINDOW_TOLERANCE: int = int(
            os.getenv("NLU_NER_WINDOW_TOLERANCE", "2"))
        """Characters a candidate window may be shorter or longer than the surface form"""

        # ====================================================================
        # Debug Settings
        # ====================================================================

        self.DEBUG_NLP: bool = os.getenv("DEBUG_NLP", "0") == "1"
        """Force the package logger to DEBUG regardless of LOG_LEVEL"""

        # ====================================================================
        # Logging Settings
        # ====================================================================

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        """Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"""

        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")
        """Log format: 'json' (structured) or 'pretty' (readable)"""

        self.LOG_FILE: Optional[str] = os.getenv("LOG_FILE")
        """Optional: Write logs to file (e.g., '/var/log/nlucore/nlu.log')"""

        self.LOG_PERFORMANCE_METRICS: bool = os.getenv(
            "LOG_PERFORMANCE_METRICS", "true").lower() == "true"
        """Time train() and find_entities() and warn on soft budget overruns"""

    # ========================================================================
    # Helper Methods
    # ========================================================================

    @classmethod
    def from_env(cls):
        """
        Create config from environment variables.

        Returns:
            New NluConfig instance with current environment values
        """
        return cls()

    def summary(self) -> str:
        """
        Get configuration summary as formatted string.

        Returns:
            Multi-line string with all config values
        """
        lines = [
            "=" * 60,
            "nlucore Configuration",
            "=" * 60,
            "",
            "Logistic Regression:",
            f"  Learning Rate:      {self.LR_LEARNING_RATE}",
            f"  Regularization:     {self.LR_REGULARIZATION}",
            f"  Max Iterations:     {self.LR_MAX_ITERATIONS}",
            f"  Tolerance:          {self.LR_TOLERANCE}",
            "",
            "Entity Extraction:",
            f"  Threshold:          {self.NER_THRESHOLD}",
            f"  Window Tolerance:   {self.NER_WINDOW_TOLERANCE}",
            "",
            "Debug:",
            f"  Debug Logging:      {'Enabled' if self.DEBUG_NLP else 'Disabled'}",
            "",
            "Logging:",
            f"  Level:              {self.LOG_LEVEL}",
            f"  Format:             {self.LOG_FORMAT}",
            f"  File:               {self.LOG_FILE or 'None'}",
            f"  Performance Logs:   {'Enabled' if self.LOG_PERFORMANCE_METRICS else 'Disabled'}",
            "",
            "=" * 60,
        ]

        return "\n".join(lines)

    def __repr__(self):
        """String representation."""
        return f"<NluConfig threshold={self.NER_THRESHOLD} max_iterations={self.LR_MAX_ITERATIONS}>"


# Global config instance
config = NluConfig()
