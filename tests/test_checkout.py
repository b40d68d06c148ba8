import os
import sys
import tempfile
import unittest
from datetime import datetime

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from store import filestore  # noqa: E402
from store.cart import add_to_cart  # noqa: E402
from store.checkout import parse_rating, run_checkout  # noqa: E402
from store.errors import StoreError  # noqa: E402
from store.repository import Repository  # noqa: E402
from utils.pure import cart_markdown, generate_markdown_table, receipt_markdown  # noqa: E402


class ScriptedRater:
    """Answers rating prompts from a fixed list and records who was asked."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked = []

    async def __call__(self, product, attempt):
        self.asked.append((product.name, attempt))
        return self.answers.pop(0)


class CheckoutTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.data_dir = self.temp_dir.name
        self.repo = Repository(self.data_dir)
        self.repo.load()

        seller = self.repo.register_seller("Ann", "ann@shop.com")
        self.customer = self.repo.register_customer("Cy", "1 Road", "555", "cy@mail.com")
        self.a = self.repo.add_product("A", 2.0, "Toys", 5, seller.sid)
        self.b = self.repo.add_product("B", 3.0, "Toys", 5, seller.sid)

    def tearDown(self):
        self.temp_dir.cleanup()

    # ---------- Guard ----------

    async def test_empty_cart_changes_nothing(self):
        rater = ScriptedRater()
        self.assertIsNone(await run_checkout(self.repo, self.customer, rater))
        self.assertEqual(rater.asked, [])
        self.assertEqual(self.a.quantity, 5)

    # ---------- Processing order ----------

    async def test_items_processed_in_order_added(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 1)
        add_to_cart(self.repo, self.customer, self.b.pid, 2)

        rater = ScriptedRater("4", "2")
        when = datetime(2025, 11, 1, 12, 0, 0)
        receipt = await run_checkout(self.repo, self.customer, rater, when)

        self.assertEqual(rater.asked, [("A", 0), ("B", 0)])
        self.assertEqual([line.name for line in receipt.lines], ["A", "B"])
        self.assertEqual(self.a.average_rating(), 4.0)
        self.assertEqual(self.b.average_rating(), 2.0)
        self.assertEqual((self.a.quantity, self.b.quantity), (4, 3))
        self.assertEqual(receipt.total, 2.0 * 1 + 3.0 * 2)
        self.assertEqual(receipt.issued_at, when)
        self.assertEqual(receipt.customer_id, self.customer.cid)
        self.assertTrue(self.customer.cart.is_empty())

    # ---------- Stock ----------

    async def test_insufficient_stock_is_per_item(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 2)
        add_to_cart(self.repo, self.customer, self.b.pid, 5)
        # stock drops after the items were added
        self.b.quantity = 1

        rater = ScriptedRater("5")
        receipt = await run_checkout(self.repo, self.customer, rater)

        self.assertEqual(self.a.quantity, 3)
        self.assertEqual(self.b.quantity, 1)
        self.assertEqual(self.b.rating_count, 0)
        self.assertEqual(rater.asked, [("A", 0)])
        self.assertEqual(receipt.total, 4.0)
        self.assertEqual(len(receipt.shortfalls), 1)
        short = receipt.shortfalls[0]
        self.assertEqual((short.name, short.requested, short.available), ("B", 5, 1))
        self.assertTrue(self.customer.cart.is_empty())

    async def test_same_product_twice_can_run_short_midway(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 4)
        add_to_cart(self.repo, self.customer, self.a.pid, 4)

        receipt = await run_checkout(self.repo, self.customer, ScriptedRater("3"))

        self.assertEqual(self.a.quantity, 1)
        self.assertEqual(len(receipt.lines), 1)
        self.assertEqual(receipt.shortfalls[0].available, 1)
        self.assertEqual(receipt.total, 8.0)

    # ---------- Pricing ----------

    async def test_charged_at_price_when_added(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 3)
        self.a.price = 100.0

        receipt = await run_checkout(self.repo, self.customer, ScriptedRater("1"))

        self.assertEqual(receipt.total, 6.0)
        self.assertEqual(receipt.lines[0].unit_price, 2.0)

    # ---------- Ratings ----------

    async def test_rating_prompt_retries_until_valid(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 1)
        rater = ScriptedRater("abc", "0", "6", "", None, "4.5", " 4 ")

        receipt = await run_checkout(self.repo, self.customer, rater)

        self.assertEqual([attempt for _, attempt in rater.asked], [0, 1, 2, 3, 4, 5, 6])
        self.assertEqual(receipt.lines[0].rating, 4)
        self.assertEqual(self.a.rating_count, 1)
        self.assertEqual(self.a.rating_sum, 4)

    def test_parse_rating(self):
        self.assertEqual(parse_rating("1"), 1)
        self.assertEqual(parse_rating(5), 5)
        self.assertIsNone(parse_rating("0"))
        self.assertIsNone(parse_rating("six"))
        self.assertIsNone(parse_rating(None))

    # ---------- Persistence ----------

    async def test_checkout_is_persisted(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 2)
        await run_checkout(self.repo, self.customer, ScriptedRater("5"))

        with open(os.path.join(self.data_dir, filestore.CARTS_FILE)) as f:
            self.assertEqual(f.read(), "")

        repo = Repository(self.data_dir)
        repo.load()
        a = repo.find_product_by_id(self.a.pid)
        self.assertEqual(a.quantity, 3)
        self.assertEqual(a.average_rating(), 5.0)

    async def test_receipt_survives_failed_save(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 2)
        add_to_cart(self.repo, self.customer, self.b.pid, 2)
        self.b.quantity = 1
        blocker = os.path.join(self.data_dir, "not-a-dir")
        with open(blocker, "w") as f:
            f.write("")
        self.repo.data_dir = os.path.join(blocker, "data")

        receipt = await run_checkout(self.repo, self.customer, ScriptedRater("3"))

        self.assertIsInstance(receipt.save_error, StoreError)
        self.assertEqual(receipt.total, 4.0)
        self.assertEqual([line.name for line in receipt.lines], ["A"])
        self.assertEqual([s.name for s in receipt.shortfalls], ["B"])
        self.assertEqual(self.a.quantity, 3)
        self.assertEqual(self.a.rating_count, 1)
        self.assertTrue(self.customer.cart.is_empty())

    async def test_successful_checkout_has_no_save_error(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 1)
        receipt = await run_checkout(self.repo, self.customer, ScriptedRater("2"))
        self.assertIsNone(receipt.save_error)

    # ---------- Display helpers ----------

    async def test_receipt_and_cart_rendering(self):
        add_to_cart(self.repo, self.customer, self.a.pid, 1)
        add_to_cart(self.repo, self.customer, self.b.pid, 2)

        md = cart_markdown(self.customer.cart.snapshot_in_order())
        self.assertIn("| 1 | B | $3.00 | 2 | $6.00 |", md)
        self.assertIn("| 2 | A | $2.00 | 1 | $2.00 |", md)
        self.assertIn("**Total Estimate:** $8.00", md)
        self.assertIn("empty", cart_markdown([]))

        self.b.quantity = 0
        receipt = await run_checkout(
            self.repo, self.customer, ScriptedRater("4"), datetime(2025, 1, 2, 3, 4, 5)
        )
        md = receipt_markdown(receipt)
        self.assertIn("Date: 2025-01-02 03:04:05", md)
        self.assertIn("| A | 1 | $2.00 | $2.00 | 4/5 |", md)
        self.assertIn("Could not process B", md)
        self.assertIn("**TOTAL PAID:** $2.00", md)

    def test_generate_markdown_table(self):
        self.assertEqual(generate_markdown_table(["a"], []), "")
        self.assertEqual(
            generate_markdown_table(["x", "y"], [[1, 2]], ["l", "r"]),
            "| x | y |\n| :--- | ---: |\n| 1 | 2 |",
        )
        with self.assertRaises(ValueError):
            generate_markdown_table(["x", "y"], [[1, 2]], ["l"])


if __name__ == "__main__":
    unittest.main()
