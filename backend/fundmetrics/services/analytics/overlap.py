# backend/fundmetrics/services/analytics/overlap.py
"""
Fund overlap analysis.

Measures how much of a set of 2-10 funds' portfolios is held in common.

    Pairwise overlap(A, B) = Σ_{ticker in A ∩ B} min(w_A, w_B)
    Overall score          = min(100, round(avg pairwise + common / unique × 20))

Diversification rating from the overall score:
    < 20 Excellent, < 35 Good, < 50 Moderate, < 70 Poor, else Very Poor

A ticker listed twice within one fund is merged into a single holding with
the summed weight before any of the above is computed.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from fundmetrics.services.analytics.types import (
    CommonHolding,
    DiversificationRating,
    FundAllocation,
    FundHoldings,
    FundPairOverlap,
    Holding,
    OverlapAnalysisResult,
    OverlapSummary,
    StockOverlap,
    UniqueHoldings,
)
from fundmetrics.services.constants import (
    HIGH_OVERLAP_THRESHOLD,
    MAX_OVERLAP_FUNDS,
    MIN_OVERLAP_FUNDS,
    RATIO_PRECISION,
)
from fundmetrics.services.exceptions import InvalidFundCountError, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# HOLDINGS PREPARATION
# =============================================================================

def merge_holdings(fund: FundHoldings) -> dict[str, Holding]:
    """
    Index a fund's holdings by ticker, summing duplicate tickers.

    Raises:
        ValidationError: If a holding has a negative weight
    """
    merged: dict[str, Holding] = {}
    for holding in fund.holdings:
        if holding.weight < 0:
            raise ValidationError(
                f"Holding {holding.ticker} in fund {fund.fund_id} has negative weight {holding.weight}",
                field="weight",
            )
        existing = merged.get(holding.ticker)
        if existing is None:
            merged[holding.ticker] = holding
        else:
            merged[holding.ticker] = Holding(
                ticker=existing.ticker,
                name=existing.name,
                weight=existing.weight + holding.weight,
                sector=existing.sector,
            )
    return merged


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# PAIRWISE OVERLAP
# =============================================================================

def _overlap_recommendation(overlap: float) -> str:
    if overlap > 50:
        return (
            f"Very High Overlap ({overlap}%). "
            f"Consider replacing one fund to improve diversification."
        )
    if overlap > 30:
        return f"High Overlap ({overlap}%). These funds have significant common holdings."
    if overlap > 15:
        return f"Moderate Overlap ({overlap}%). Acceptable level of diversification."
    return f"Low Overlap ({overlap}%). Excellent diversification between these funds."


def calculate_pairwise_overlap(fund1: FundHoldings, fund2: FundHoldings) -> FundPairOverlap:
    """
    Overlap between two funds as the sum of the smaller weight per common stock.

    Symmetric: swapping the funds swaps the per-fund fields but yields the
    same overlap_percentage and common tickers.
    """
    holdings1 = merge_holdings(fund1)
    holdings2 = merge_holdings(fund2)

    common = []
    overlap_sum = 0.0
    for ticker, holding1 in holdings1.items():
        holding2 = holdings2.get(ticker)
        if holding2 is None:
            continue
        common.append(CommonHolding(
            ticker=ticker,
            name=holding1.name,
            fund1_weight=holding1.weight,
            fund2_weight=holding2.weight,
        ))
        overlap_sum += min(holding1.weight, holding2.weight)

    common.sort(key=lambda h: (-min(h.fund1_weight, h.fund2_weight), h.ticker))
    overlap = round(overlap_sum, RATIO_PRECISION)

    return FundPairOverlap(
        fund1_id=fund1.fund_id,
        fund1_name=fund1.fund_name,
        fund2_id=fund2.fund_id,
        fund2_name=fund2.fund_name,
        overlap_percentage=overlap,
        common_holdings=common,
        recommendation=_overlap_recommendation(overlap),
    )


# =============================================================================
# ANALYSIS
# =============================================================================

def rate_diversification(overall_score: float) -> DiversificationRating:
    if overall_score < 20:
        return DiversificationRating.EXCELLENT
    if overall_score < 35:
        return DiversificationRating.GOOD
    if overall_score < 50:
        return DiversificationRating.MODERATE
    if overall_score < 70:
        return DiversificationRating.POOR
    return DiversificationRating.VERY_POOR


def analyze_fund_overlap(
        funds: Sequence[FundHoldings],
        min_funds: int = MIN_OVERLAP_FUNDS,
        max_funds: int = MAX_OVERLAP_FUNDS,
) -> OverlapAnalysisResult:
    """
    Analyze common holdings across several funds.

    Args:
        funds: Funds with their holdings (2-10 by default)
        min_funds: Minimum number of funds accepted
        max_funds: Maximum number of funds accepted

    Returns:
        OverlapAnalysisResult with common stocks sorted by holder count and
        pairwise overlaps sorted by overlap descending

    Raises:
        InvalidFundCountError: Fund count outside [min_funds, max_funds]
        ValidationError: A holding has a negative weight
    """
    if not min_funds <= len(funds) <= max_funds:
        raise InvalidFundCountError(len(funds), min_funds, max_funds)

    indexed = [(fund, merge_holdings(fund)) for fund in funds]

    # ticker -> (name, [(fund, weight)])
    stock_map: dict[str, tuple[str, list[FundAllocation]]] = {}
    for fund, holdings in indexed:
        for ticker, holding in holdings.items():
            if ticker not in stock_map:
                stock_map[ticker] = (holding.name, [])
            stock_map[ticker][1].append(FundAllocation(
                fund_id=fund.fund_id,
                fund_name=fund.fund_name,
                weight=holding.weight,
            ))

    common_stocks = [
        StockOverlap(
            ticker=ticker,
            name=name,
            fund_allocations=allocations,
            overlap_score=len(allocations),
        )
        for ticker, (name, allocations) in stock_map.items()
        if len(allocations) >= 2
    ]
    common_stocks.sort(key=lambda s: -s.overlap_score)

    pairwise = [
        calculate_pairwise_overlap(funds[i], funds[j])
        for i in range(len(funds))
        for j in range(i + 1, len(funds))
    ]
    pairwise.sort(key=lambda p: -p.overlap_percentage)

    total_unique_stocks = len(stock_map)
    average_overlap = sum(p.overlap_percentage for p in pairwise) / len(pairwise)
    common_ratio = len(common_stocks) / total_unique_stocks if total_unique_stocks else 0.0
    overall_score = min(100, _round_half_up(average_overlap + common_ratio * 20))

    rating = rate_diversification(overall_score)
    highly_overlapping = sum(1 for p in pairwise if p.overlap_percentage > HIGH_OVERLAP_THRESHOLD)
    single_fund_stocks = sum(1 for _, allocations in stock_map.values() if len(allocations) == 1)

    fund_unique = []
    for fund, holdings in indexed:
        unique = sorted(
            (h for t, h in holdings.items() if len(stock_map[t][1]) == 1),
            key=lambda h: -h.weight,
        )
        fund_unique.append(UniqueHoldings(
            fund_id=fund.fund_id,
            fund_name=fund.fund_name,
            unique_stocks=unique,
            unique_stocks_count=len(unique),
            unique_allocation_percentage=round(sum(h.weight for h in unique), RATIO_PRECISION),
        ))

    recommendations = []
    if overall_score > 50:
        recommendations.append(
            "Your portfolio has significant overlap. Consider replacing some funds."
        )
    if highly_overlapping > 0:
        recommendations.append(
            f"{highly_overlapping} fund pair(s) have >{HIGH_OVERLAP_THRESHOLD:g}% overlap. "
            f"Review these combinations."
        )
    if len(common_stocks) > total_unique_stocks * 0.3:
        recommendations.append(
            f"{len(common_stocks)} stocks are held by multiple funds. "
            f"This reduces diversification benefits."
        )
    in_all_funds = [s for s in common_stocks if s.overlap_score == len(funds)]
    if in_all_funds:
        names = ", ".join(s.name for s in in_all_funds[:3])
        recommendations.append(
            f"{len(in_all_funds)} stock(s) appear in ALL funds: {names}. "
            f"Consider if this concentration is intentional."
        )
    if rating in (DiversificationRating.EXCELLENT, DiversificationRating.GOOD):
        recommendations.append(
            "Your fund selection shows good diversification with minimal overlap."
        )
    recommendations.append(
        f"Portfolio has {total_unique_stocks} unique stocks with "
        f"{single_fund_stocks} holdings appearing in only one fund."
    )

    logger.debug(
        f"Overlap across {len(funds)} funds: {len(common_stocks)} common of "
        f"{total_unique_stocks} stocks, score={overall_score}"
    )

    return OverlapAnalysisResult(
        total_funds=len(funds),
        common_stocks=common_stocks,
        pairwise_overlap=pairwise,
        fund_unique_holdings=fund_unique,
        overall_overlap_score=overall_score,
        diversification_rating=rating,
        recommendations=recommendations,
        summary=OverlapSummary(
            highly_overlapping_pairs=highly_overlapping,
            unique_holdings=single_fund_stocks,
            total_unique_stocks=total_unique_stocks,
            average_overlap=round(average_overlap, RATIO_PRECISION),
        ),
    )
