from unittest import TestCase
from tokenledger.client import LedgerClient, LedgerProxy
from tokenledger.ledger import storage_key
from tokenledger.db.driver import InMemDriver, ContractDriver
from tokenledger.events import Transfer, Approval
from tokenledger.exceptions import (
    InsufficientBalance,
    InsufficientApproval,
    IllegalManager,
    LedgerExists,
    LedgerNotFound,
)


class TestClient(TestCase):
    def setUp(self):
        self.raw_driver = InMemDriver()
        self.contract_driver = ContractDriver(driver=self.raw_driver)
        self.client = LedgerClient(signer='A', driver=self.contract_driver)
        self.token = self.client.deploy(1000)

    def tearDown(self):
        self.client.flush()

    def test_construct(self):
        self.assertEqual(self.token.total_supply(), 1000)
        self.assertEqual(self.token.balance_of(who='A'), 1000)
        self.assertEqual(self.token.owner(), 'A')

    def test_construct_events(self):
        client = LedgerClient(signer='A')
        client.deploy(1000)

        self.assertListEqual(client.last_events, [Transfer(sender=None, receiver='A', value=1000)])

    def test_deploy_twice_raises(self):
        with self.assertRaises(LedgerExists):
            self.client.deploy(1000)

    def test_get_ledger_missing_raises(self):
        with self.assertRaises(LedgerNotFound):
            self.client.get_ledger('missing')

    def test_get_ledger_returns_proxy(self):
        token = self.client.get_ledger('ledger', signer='B')

        self.assertIsInstance(token, LedgerProxy)
        self.assertEqual(token.signer, 'B')

    def test_transfer(self):
        result = self.token.transfer(to='B', value=300)

        self.assertIsNone(result)
        self.assertEqual(self.token.balance_of(who='A'), 700)
        self.assertEqual(self.token.balance_of(who='B'), 300)
        self.assertEqual(self.token.total_supply(), 1000)

    def test_transfer_exceeding_balance(self):
        with self.assertRaises(InsufficientBalance):
            self.token.transfer(to='B', value=10000)

        self.assertEqual(self.token.balance_of(who='A'), 1000)

    def test_transfer_exceeding_balance_after_transfer(self):
        self.token.transfer(to='B', value=300)

        with self.assertRaises(InsufficientBalance):
            self.token.transfer(to='B', value=10000)

        self.assertEqual(self.token.balance_of(who='A'), 700)

    def test_approve_and_transfer_from(self):
        self.token.approve(spender='C', value=200)
        self.token.transfer_from(sender='A', to='D', value=150, signer='C')

        self.assertEqual(self.token.allowance(owner='A', spender='C'), 50)
        self.assertEqual(self.token.balance_of(who='A'), 850)
        self.assertEqual(self.token.balance_of(who='D'), 150)
        self.assertListEqual(self.client.last_events, [Transfer(sender='A', receiver='D', value=150)])

    def test_transfer_from_exceeding_remaining_allowance(self):
        self.token.approve(spender='C', value=200)
        self.token.transfer_from(sender='A', to='D', value=150, signer='C')

        with self.assertRaises(InsufficientApproval):
            self.token.transfer_from(sender='A', to='D', value=100, signer='C')

        self.assertEqual(self.token.allowance(owner='A', spender='C'), 50)

    def test_approve_event(self):
        self.token.approve(spender='C', value=200)

        self.assertListEqual(self.client.last_events, [Approval(owner='A', spender='C', value=200)])

    def test_mint_by_non_owner_then_owner(self):
        with self.assertRaises(IllegalManager):
            self.token.mint(value=500, signer='B')

        self.assertEqual(self.token.total_supply(), 1000)

        self.token.mint(value=500)

        self.assertEqual(self.token.total_supply(), 1500)
        self.assertEqual(self.token.balance_of(who='A'), 1500)

    def test_burn(self):
        self.token.burn(value=250)

        self.assertEqual(self.token.total_supply(), 750)
        self.assertListEqual(self.client.last_events, [Transfer(sender='A', receiver=None, value=250)])

    def test_proxy_bound_to_other_signer(self):
        self.token.transfer(to='B', value=300)
        b_token = self.client.get_ledger(signer='B')
        b_token.transfer(to='C', value=100)

        self.assertEqual(self.token.balance_of(who='B'), 200)
        self.assertEqual(self.token.balance_of(who='C'), 100)

    def test_state_reaches_raw_driver(self):
        self.token.transfer(to='B', value=300)

        self.assertEqual(self.raw_driver.get('ledger.balances:' + storage_key('B')), 300)

    def test_keys(self):
        self.token.transfer(to='B', value=300)

        self.assertListEqual(self.token.keys(), [
            'ledger.balances:' + storage_key('A'),
            'ledger.balances:' + storage_key('B'),
            'ledger.owner',
            'ledger.total_supply'
        ])

    def test_quick_read(self):
        self.token.approve(spender='C', value=200)

        self.assertEqual(self.token.quick_read('balances', 'A'), 1000)
        self.assertEqual(self.token.quick_read('allowances', 'A', args=['C']), 200)

    def test_direct_ledger_view(self):
        self.token.transfer(to='B', value=1)

        self.assertEqual(self.token.ledger.balance_of('B'), 1)

    def test_run_private_function(self):
        self.token.run_private_function('_move', sender='A', receiver='B', value=10)

        self.assertEqual(self.token.balance_of(who='B'), 10)
        self.assertFalse(self.client.executor.bypass_privates)

    def test_get_ledgers(self):
        self.client.deploy(5, name='second', signer='B')

        self.assertListEqual(sorted(self.client.get_ledgers()), ['ledger', 'second'])

    def test_get_set_var(self):
        self.client.set_var('ledger', 'balances', [storage_key('Z')], value=0)

        self.assertEqual(self.client.get_var('ledger', 'balances', [storage_key('A')]), 1000)
        self.assertEqual(self.client.get_var('ledger', 'balances', [storage_key('Z')]), 0)

    def test_str_signer_cannot_spend_int_identity_funds(self):
        client = LedgerClient(signer=7)
        token = client.deploy(1000)

        with self.assertRaises(InsufficientBalance):
            token.transfer(to='mallory', value=1000, signer='7')

        self.assertEqual(token.balance_of(who=7), 1000)
        self.assertEqual(token.balance_of(who='mallory'), 0)

    def test_hex_str_signer_cannot_approve_for_bytes_identity(self):
        client = LedgerClient(signer=b'\x01')
        token = client.deploy(1000)

        token.approve(spender='bob', value=100, signer='01')

        self.assertEqual(token.allowance(owner=b'\x01', spender='bob'), 0)
        self.assertEqual(token.allowance(owner='01', spender='bob'), 100)

        with self.assertRaises(InsufficientApproval):
            token.transfer_from(sender=b'\x01', to='bob', value=1, signer='bob')

    def test_deploy_with_zero_signer(self):
        client = LedgerClient(signer='sys')
        token = client.deploy(5, signer=0)

        self.assertEqual(token.owner(), 0)
        self.assertEqual(token.balance_of(who=0), 5)

    def test_flush_removes_ledger(self):
        self.client.flush()

        with self.assertRaises(LedgerNotFound):
            self.client.get_ledger()
