from unittest import TestCase
from nftledger import exceptions


class TestExceptions(TestCase):
    def test_message_is_formatted_from_kwargs(self):
        e = exceptions.NonexistentToken(token_id=7)

        self.assertEqual(str(e), "Token '7' does not exist")
        self.assertDictEqual(e.kwargs, {'token_id': 7})

    def test_name(self):
        self.assertEqual(exceptions.SupplyExhausted(max_supply=1).name, 'SupplyExhausted')

    def test_every_error_is_a_ledger_error(self):
        for cls in (exceptions.ConfigError, exceptions.Unauthorized, exceptions.Paused, exceptions.NotPaused,
                    exceptions.InvalidRecipient, exceptions.SupplyExhausted, exceptions.NonexistentToken,
                    exceptions.OwnershipMismatch, exceptions.NotAuthorized, exceptions.InvalidApproval,
                    exceptions.InvalidTokenURI, exceptions.PrivateMethod, exceptions.UnknownFunction,
                    exceptions.InvalidAccount):
            self.assertTrue(issubclass(cls, exceptions.LedgerError))

    def test_missing_format_kwarg_raises(self):
        with self.assertRaises(KeyError):
            exceptions.NotAuthorized(caller='bob')
