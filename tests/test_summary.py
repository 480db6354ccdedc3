from checkout.engine import Checkout
from checkout.summary import PromotionLine, SummaryLine, summarize

def test_summary_of_mixed_basket(catalogue):
    session = Checkout(catalogue)
    for sku in ["A", "A", "B", "B", "A", "C", "D"]:
        session.scan(sku)

    summary = summarize(session)

    assert summary.total == 210
    assert summary.lines == [
        SummaryLine("A", 3, 50, 150),
        SummaryLine("B", 2, 30, 60),
        SummaryLine("C", 1, 20, 20),
        SummaryLine("D", 1, 15, 15),
    ]
    assert summary.promotions == [
        PromotionLine("A", 3, 130, 1, 20),
        PromotionLine("B", 2, 45, 1, 15),
    ]
    assert summary.total_saved == 35
    # undiscounted lines minus savings gives the total back
    assert sum(line.subtotal for line in summary.lines) - summary.total_saved == summary.total

def test_savings_scale_with_bundles(catalogue):
    session = Checkout(catalogue)
    for _ in range(7):
        session.scan("A")
    promo = summarize(session).promotions[0]
    assert promo.applied == 2
    assert promo.saved == (3 * 50 - 130) * 2

def test_empty_summary(catalogue):
    summary = summarize(Checkout(catalogue))
    assert summary.to_dict() == {"lines": [], "promotions": [], "total": 0, "total_saved": 0}
