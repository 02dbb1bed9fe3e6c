"""Share Verify.

Exact integer Shamir-style secret reconstruction with majority-vote
detection of forged or erroneous shares.
"""

__version__ = "0.1.0"
