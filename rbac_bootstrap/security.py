# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Password policy, bcrypt hashing and secure password generation."""

import logging
import re
import secrets
import string
import unicodedata

import bcrypt

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
# bcrypt only consumes the first 72 bytes of its input
MAX_PASSWORD_LENGTH = 72
BCRYPT_COST = 12
MIN_BCRYPT_COST = 4
MAX_BCRYPT_COST = 31

UPPERCASE_CHARS = string.ascii_uppercase
LOWERCASE_CHARS = string.ascii_lowercase
DIGIT_CHARS = string.digits
SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
ALL_CHARS = UPPERCASE_CHARS + LOWERCASE_CHARS + DIGIT_CHARS + SPECIAL_CHARS

# $2a$/$2b$/$2y$, two-digit cost, 22 chars of salt + 31 chars of digest
BCRYPT_HASH_PATTERN = re.compile(r"\$2[aby]\$([0-9]{2})\$[./A-Za-z0-9]{53}")


class PasswordError(Exception):
    """Base exception for password policy errors."""


class PasswordValidationError(PasswordError):
    """Password does not meet the policy."""


class PasswordTooShortError(PasswordValidationError):
    """Password is shorter than the minimum length."""

    def __init__(self) -> None:
        super().__init__(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


class PasswordTooLongError(PasswordValidationError):
    """Password exceeds the maximum bcrypt input length."""

    def __init__(self) -> None:
        super().__init__(f"password must not exceed {MAX_PASSWORD_LENGTH} characters")


class PasswordTooWeakError(PasswordValidationError):
    """Password is missing a required character category."""

    def __init__(self) -> None:
        super().__init__(
            "password must contain at least one uppercase letter, one lowercase "
            "letter, one number, and one special character"
        )


class PasswordHashError(PasswordError):
    """The hashing primitive failed."""


class PasswordCompareError(PasswordError):
    """Password could not be verified against a hash."""


class PasswordMismatchError(PasswordCompareError):
    """Password does not match the hash."""


class MalformedHashError(PasswordCompareError):
    """Value is not a parseable bcrypt hash."""


def _is_number(char: str) -> bool:
    return unicodedata.category(char)[0] == "N"


def _is_special(char: str) -> bool:
    # Unicode punctuation (P*) or symbol (S*) categories
    return unicodedata.category(char)[0] in ("P", "S")


class PasswordPolicy:
    """Validates, hashes, verifies and generates passwords.

    Storage agnostic; the only side effect is consuming randomness when
    salting or generating.
    """

    def __init__(self, cost: int = BCRYPT_COST) -> None:
        """Initialize the policy.

        Args:
            cost: bcrypt work factor for new hashes

        Raises:
            ValueError: If cost is outside the range bcrypt supports
        """
        if not MIN_BCRYPT_COST <= cost <= MAX_BCRYPT_COST:
            raise ValueError(
                f"bcrypt cost must be between {MIN_BCRYPT_COST} and "
                f"{MAX_BCRYPT_COST}, got {cost}"
            )
        self.cost = cost
        self._random = secrets.SystemRandom()

    def validate(self, password: str) -> None:
        """Check that a password meets the minimum strength requirements.

        Length checks run first and short-circuit the category checks.

        Raises:
            PasswordTooShortError: Fewer than 8 characters
            PasswordTooLongError: More than 72 characters or 72 UTF-8 bytes
            PasswordTooWeakError: Missing an uppercase letter, lowercase
                letter, digit or special character
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortError()
        if (
            len(password) > MAX_PASSWORD_LENGTH
            or len(password.encode("utf-8")) > MAX_PASSWORD_LENGTH
        ):
            raise PasswordTooLongError()

        has_upper = has_lower = has_digit = has_special = False
        for char in password:
            if char.isupper():
                has_upper = True
            elif char.islower():
                has_lower = True
            elif _is_number(char):
                has_digit = True
            elif _is_special(char):
                has_special = True

        if not (has_upper and has_lower and has_digit and has_special):
            raise PasswordTooWeakError()

    def hash(self, password: str) -> str:
        """Validate and hash a password with bcrypt.

        Returns:
            The encoded bcrypt hash

        Raises:
            PasswordValidationError: If the password fails validation
            PasswordHashError: If bcrypt fails
        """
        self.validate(password)
        try:
            hashed = bcrypt.hashpw(
                password.encode("utf-8"), bcrypt.gensalt(rounds=self.cost)
            )
        except (ValueError, TypeError) as e:
            raise PasswordHashError("failed to hash password") from e
        return hashed.decode("utf-8")

    def compare(self, hashed: str, password: str) -> None:
        """Verify a password against a bcrypt hash in constant time.

        Raises:
            MalformedHashError: If ``hashed`` is not a bcrypt hash
            PasswordMismatchError: If the password does not match
        """
        if not self.is_hash_format(hashed):
            raise MalformedHashError("value is not a bcrypt hash")

        password_bytes = password.encode("utf-8")
        if len(password_bytes) > MAX_PASSWORD_LENGTH:
            # hash() never accepts such input, so it cannot match
            raise PasswordMismatchError("password does not match")

        try:
            matches = bcrypt.checkpw(password_bytes, hashed.encode("utf-8"))
        except ValueError as e:
            raise MalformedHashError("value is not a bcrypt hash") from e
        if not matches:
            raise PasswordMismatchError("password does not match")

    def generate_random(self, length: int = 16) -> str:
        """Generate a random password that passes ``validate``.

        The length is clamped into [8, 72]. One character of each required
        category is placed first, the remainder is drawn from all
        categories, then the whole buffer is shuffled.
        """
        length = max(MIN_PASSWORD_LENGTH, min(length, MAX_PASSWORD_LENGTH))

        chars = [
            secrets.choice(UPPERCASE_CHARS),
            secrets.choice(LOWERCASE_CHARS),
            secrets.choice(DIGIT_CHARS),
            secrets.choice(SPECIAL_CHARS),
        ]
        chars.extend(secrets.choice(ALL_CHARS) for _ in range(length - len(chars)))
        self._random.shuffle(chars)
        return "".join(chars)

    def is_hash_format(self, candidate: str) -> bool:
        """Check whether a string has the shape of a bcrypt hash."""
        return BCRYPT_HASH_PATTERN.fullmatch(candidate) is not None

    def hash_cost(self, hashed: str) -> int:
        """Return the work factor encoded in a bcrypt hash.

        Raises:
            MalformedHashError: If ``hashed`` is not a bcrypt hash
        """
        match = BCRYPT_HASH_PATTERN.fullmatch(hashed)
        if match is None:
            raise MalformedHashError("value is not a bcrypt hash")
        return int(match.group(1))

    def needs_rehash(self, hashed: str, password: str) -> tuple[str, bool]:
        """Upgrade a hash whose work factor is below the configured cost.

        Returns:
            Tuple of (hash to store, whether it was recomputed)

        Raises:
            MalformedHashError: If ``hashed`` is not a bcrypt hash
            PasswordValidationError: If rehashing and the password fails
                validation
            PasswordHashError: If rehashing and bcrypt fails
        """
        current_cost = self.hash_cost(hashed)
        if current_cost < self.cost:
            logger.debug(f"Rehashing password from cost {current_cost} to {self.cost}")
            return self.hash(password), True
        return hashed, False
