"""Tests for the bcrypt password hasher."""

from __future__ import annotations

import unittest

from userstore.hashing import BCRYPT_ROUNDS, MAX_PASSWORD_BYTES, PasswordHasher, default_hasher


class PasswordHashingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_default_cost_factor_is_embedded_in_hash(self) -> None:
        hashed = default_hasher.hash("supersecurepassword")
        self.assertEqual(default_hasher.rounds, BCRYPT_ROUNDS)
        self.assertTrue(hashed.startswith("$2b$12$"))
        self.assertTrue(default_hasher.verify("supersecurepassword", hashed))
        self.assertFalse(default_hasher.verify("incorrect", hashed))

    def test_hashes_are_salted(self) -> None:
        first = self.hasher.hash("anothersecurepassword")
        second = self.hasher.hash("anothersecurepassword")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("anothersecurepassword", first))
        self.assertTrue(self.hasher.verify("anothersecurepassword", second))

    def test_different_passwords_do_not_match(self) -> None:
        hashed = self.hasher.hash("correct horse battery")
        self.assertFalse(self.hasher.verify("correct horse battery staple", hashed))
        self.assertFalse(self.hasher.verify("", hashed))

    def test_hash_does_not_contain_plaintext(self) -> None:
        hashed = self.hasher.hash("plaintextsecret")
        self.assertNotIn("plaintextsecret", hashed)

    def test_malformed_hashes_are_mismatches(self) -> None:
        for stored in ("", None, "not-a-hash", "$2b$04$tooshort", "pbkdf2_sha256$1$abc$def"):
            with self.subTest(stored=stored):
                self.assertFalse(self.hasher.verify("whatever123", stored))

    def test_password_at_byte_limit_is_hashed(self) -> None:
        password = "q" * MAX_PASSWORD_BYTES
        hashed = self.hasher.hash(password)
        self.assertTrue(self.hasher.verify(password, hashed))

    def test_password_over_byte_limit_is_refused(self) -> None:
        with self.assertRaises(ValueError):
            self.hasher.hash("q" * MAX_PASSWORD_BYTES + "AAA")
        with self.assertRaises(ValueError):
            self.hasher.hash("z" * 5000)
        with self.assertRaises(ValueError):
            self.hasher.hash("\u00e9" * 37)

    def test_bytes_past_the_limit_never_match(self) -> None:
        hashed = self.hasher.hash("q" * MAX_PASSWORD_BYTES)
        self.assertFalse(self.hasher.verify("q" * MAX_PASSWORD_BYTES + "ZZZ", hashed))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
