import threading
import unittest
from unittest.mock import patch

from exchanges.cexio.errors import ConfigurationError
from exchanges.cexio.signer import NonceCounter, RequestSigner, compute_signature

REFERENCE_SIGNATURE = "0E02C59BC851B6665F22E3BBC82576D41777BD384567AE265E3472AEC19701B9"


class SignatureTests(unittest.TestCase):
    def test_reference_vector(self) -> None:
        self.assertEqual(compute_signature(1000, "u", "k", "s"), REFERENCE_SIGNATURE)

    def test_signature_is_uppercase_hex(self) -> None:
        signature = compute_signature(1383379054, "user", "key", "secret")
        self.assertEqual(len(signature), 64)
        self.assertEqual(signature, signature.upper())
        int(signature, 16)

    def test_signer_uses_and_advances_nonce(self) -> None:
        signer = RequestSigner(username="u", api_key="k", api_secret="s", nonce=NonceCounter(1000))
        first = signer.sign()
        second = signer.sign()
        self.assertEqual(first.nonce, 1000)
        self.assertEqual(first.signature, REFERENCE_SIGNATURE)
        self.assertEqual(second.nonce, 1001)
        self.assertNotEqual(second.signature, first.signature)

    def test_signed_form_fields(self) -> None:
        signer = RequestSigner(username="u", api_key="k", api_secret="s", nonce=NonceCounter(1000))
        form = signer.signed_form({"id": 7})
        self.assertEqual(form, {"key": "k", "signature": REFERENCE_SIGNATURE, "nonce": 1000, "id": 7})

    def test_missing_credential_does_not_consume_nonce(self) -> None:
        counter = NonceCounter(50)
        signer = RequestSigner(username="u", api_key="k", api_secret="", nonce=counter)
        with self.assertRaises(ConfigurationError) as ctx:
            signer.sign()
        self.assertIn("api_secret", str(ctx.exception))
        self.assertEqual(counter.peek(), 50)


class NonceCounterTests(unittest.TestCase):
    def test_defaults_to_current_time(self) -> None:
        with patch("exchanges.cexio.signer.time.time", return_value=1383379054.7):
            counter = NonceCounter()
        self.assertEqual(counter.next(), 1383379054)
        self.assertEqual(counter.next(), 1383379055)

    def test_explicit_start(self) -> None:
        counter = NonceCounter(0)
        self.assertEqual([counter.next() for _ in range(3)], [0, 1, 2])

    def test_concurrent_callers_get_unique_nonces(self) -> None:
        counter = NonceCounter(1)
        seen = []
        lock = threading.Lock()

        def worker() -> None:
            values = [counter.next() for _ in range(200)]
            with lock:
                seen.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(sorted(seen), list(range(1, 1601)))


if __name__ == "__main__":
    unittest.main()
