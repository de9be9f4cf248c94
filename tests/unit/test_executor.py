from unittest import TestCase
import threading

from nftregistry.contracts.nft import NFT
from nftregistry.events import Transfer
from nftregistry.exceptions import FunctionNotExported, NotExpectedValue, NotAuthorized
from nftregistry.execution.access import export, is_exported, exported_functions
from nftregistry.execution.executor import Executor
from nftregistry import config

FEE = config.FEE


class TestAccess(TestCase):
    def test_export_marks_function(self):
        @export
        def f():
            pass

        def g():
            pass

        self.assertTrue(is_exported(f))
        self.assertFalse(is_exported(g))
        self.assertFalse(is_exported(None))

    def test_exported_functions_hide_caller(self):
        e = Executor()
        funcs = dict(exported_functions(NFT(driver=e.driver, events=e.events)))

        self.assertListEqual(funcs['mint'], ['payment'])
        self.assertListEqual(funcs['transfer_from'], ['sender', 'to', 'token_id'])
        self.assertListEqual(funcs['total_supply'], [])
        self.assertNotIn('FEE', funcs)


class TestExecutor(TestCase):
    def setUp(self):
        self.e = Executor()
        self.nft = self.e.register(NFT(driver=self.e.driver, events=self.e.events))

    def tearDown(self):
        self.e.driver.flush()

    def test_successful_call_commits(self):
        output = self.e.execute('stu', 'mint', kwargs={'payment': FEE})

        self.assertEqual(output['status_code'], 0)
        self.assertEqual(output['result'], 0)
        self.assertEqual(output['writes'], {
            'nft.total_supply': 1,
            'nft.owners:0': 'stu',
            'nft.balances:stu': 1
        })
        self.assertEqual(output['events'], [Transfer(config.ZERO_ADDRESS, 'stu', 0)])

        self.assertEqual(self.e.driver.pending_writes, {})
        self.assertEqual(self.e.driver.driver.get('nft.owners:0'), 'stu')
        self.assertEqual(self.e.events.history, [Transfer(config.ZERO_ADDRESS, 'stu', 0)])

    def test_failed_call_returns_error_and_rolls_back(self):
        output = self.e.execute('stu', 'mint', kwargs={'payment': FEE // 2})

        self.assertEqual(output['status_code'], 1)
        self.assertIsInstance(output['result'], NotExpectedValue)
        self.assertEqual(output['writes'], {})
        self.assertEqual(output['events'], [])
        self.assertEqual(self.e.events.history, [])

    def test_unexpected_error_rolls_back_partial_writes(self):
        self.e.execute('stu', 'mint', kwargs={'payment': FEE})

        def half_move(token_id, sender, to):
            self.nft.registry.owners[token_id] = to
            raise RuntimeError('boom')

        self.nft.registry.move = half_move
        try:
            output = self.e.execute('stu', 'transfer_from', kwargs={'sender': 'stu', 'to': 'raghu', 'token_id': 0})
        finally:
            del self.nft.registry.move

        self.assertEqual(output['status_code'], 1)
        self.assertIsInstance(output['result'], RuntimeError)
        self.assertEqual(self.e.driver.get('nft.owners:0'), 'stu')
        self.assertEqual(self.e.events.history, [Transfer(config.ZERO_ADDRESS, 'stu', 0)])

    def test_private_functions_refused(self):
        output = self.e.execute('stu', '__init__')

        self.assertEqual(output['status_code'], 1)
        self.assertIsInstance(output['result'], FunctionNotExported)

    def test_unexported_functions_refused(self):
        output = self.e.execute('stu', 'registry')
        self.assertIsInstance(output['result'], FunctionNotExported)

    def test_unknown_contract_refused(self):
        output = self.e.execute('stu', 'mint', kwargs={'payment': FEE}, contract_name='currency')
        self.assertIsInstance(output['result'], FunctionNotExported)

    def test_bad_kwargs_are_reported(self):
        output = self.e.execute('stu', 'mint', kwargs={'amount': FEE})

        self.assertEqual(output['status_code'], 1)
        self.assertIsInstance(output['result'], TypeError)

    def test_manual_commit(self):
        output = self.e.execute('stu', 'mint', kwargs={'payment': FEE}, auto_commit=False)

        self.assertEqual(output['status_code'], 0)
        self.assertIsNone(self.e.driver.driver.get('nft.owners:0'))

        self.e.commit()

        self.assertEqual(self.e.driver.driver.get('nft.owners:0'), 'stu')

    def test_manual_rollback(self):
        self.e.execute('stu', 'mint', kwargs={'payment': FEE}, auto_commit=False)
        self.e.rollback()

        output = self.e.execute('stu', 'total_supply')
        self.assertEqual(output['result'], 0)
        self.assertEqual(self.e.events.history, [])

    def test_concurrent_transfers_of_one_token_are_serialized(self):
        self.e.execute('stu', 'mint', kwargs={'payment': FEE})
        self.e.execute('stu', 'set_approval_for_all', kwargs={'operator': 'raghu', 'approved': True})
        self.e.execute('stu', 'set_approval_for_all', kwargs={'operator': 'tejas', 'approved': True})

        outputs = []

        def move(caller, to):
            outputs.append(self.e.execute(caller, 'transfer_from',
                                          kwargs={'sender': 'stu', 'to': to, 'token_id': 0}))

        threads = [threading.Thread(target=move, args=(c, c)) for c in ('raghu', 'tejas')]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        codes = sorted(o['status_code'] for o in outputs)
        self.assertEqual(codes, [0, 1])

        failed = [o for o in outputs if o['status_code'] == 1][0]
        self.assertIsInstance(failed['result'], NotAuthorized)

        balances = [self.e.execute('stu', 'balance_of', kwargs={'account': a})['result']
                    for a in ('stu', 'raghu', 'tejas')]
        self.assertEqual(sum(balances), 1)
