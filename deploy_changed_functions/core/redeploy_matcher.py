"""Extraction of follow-up deploy commands from deploy tool output"""

import re
import shlex
from abc import ABC, abstractmethod
from typing import List, Optional, Pattern

from ..constants import REDEPLOY_PATTERN


class RedeployMatcher(ABC):
    """Finds a suggested redeploy command in captured deploy output"""

    @abstractmethod
    def match(self, output: str) -> Optional[List[str]]:
        """
        Args:
            output: Captured stdout of a failed deploy

        Returns:
            Arguments for the deploy tool, or None if no suggestion is present
        """
        pass


class FirebaseRedeployMatcher(RedeployMatcher):
    """Matches the Firebase CLI hint printed after a partial functions failure::

        To try redeploying those functions, run:
            firebase deploy --only functions:foo,functions:bar
    """

    def __init__(self, pattern: Pattern = REDEPLOY_PATTERN):
        self.pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)

    def match(self, output: str) -> Optional[List[str]]:
        if not output:
            return None

        result = self.pattern.search(output)
        if not result:
            return None

        args = shlex.split(result.group(1).strip())
        return args or None
