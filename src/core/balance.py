"""Balance overview and detail views (core domain).

Callback data for the overview buttons is ``<view>_<user_id>``, where view is
one of ``BALANCE_VIEWS``.
"""

from __future__ import annotations

from typing import Optional, Tuple

from core.models import BalanceReport, ButtonRow, PeriodStats

BALANCE_VIEWS = (
    "today",
    "today_earnings",
    "today_cpm",
    "month",
    "month_earnings",
    "month_cpm",
    "balance",
)


def _plain(value: float) -> str:
    # Drop trailing zeros so 3.0 reads "3" and 0.0012 stays "0.0012".
    return f"{value:.6f}".rstrip("0").rstrip(".")


def cpm(period: PeriodStats) -> str:
    """Earnings per 1000 views, three decimals."""

    if period.views <= 0:
        return "0.000"
    return f"{period.earnings / period.views * 1000:.3f}"


def per_view(period: PeriodStats) -> str:
    if period.views <= 0:
        return "0.000000"
    return f"{period.earnings / period.views:.6f}"


def format_overview(report: BalanceReport) -> str:
    return f"💰 Account Overview\n\n👤 Username: {report.username}\n💵 Currency: {report.currency}"


def overview_buttons(report: BalanceReport, user_id: int) -> Tuple[ButtonRow, ...]:
    today = report.today
    month = report.this_month
    return (
        (
            (f"📈 Today: {today.views} views", f"today_{user_id}"),
            (f"💰 Today: ${_plain(today.earnings)}", f"today_earnings_{user_id}"),
        ),
        ((f"📊 Today CPM: ${cpm(today)}", f"today_cpm_{user_id}"),),
        (
            (f"📅 Month: {month.views} views", f"month_{user_id}"),
            (f"💵 Month: ${_plain(month.earnings)}", f"month_earnings_{user_id}"),
        ),
        ((f"📈 Month CPM: ${cpm(month)}", f"month_cpm_{user_id}"),),
        (("💰 Balance Details", f"balance_{user_id}"),),
    )


def parse_callback_data(data: str) -> Optional[Tuple[str, int]]:
    """Split ``<view>_<user_id>``; return None for anything else."""

    view, sep, raw_user_id = (data or "").rpartition("_")
    if not sep or view not in BALANCE_VIEWS:
        return None
    try:
        return view, int(raw_user_id)
    except ValueError:
        return None


def _period_earnings(title: str, period: PeriodStats, total: bool) -> str:
    prefix = "Total " if total else ""
    return (
        f"{title}\n\n"
        f"💰 {prefix}Earnings: ${_plain(period.earnings)}\n"
        f"📊 {prefix}Views: {period.views}\n"
        f"📈 Average per view: ${per_view(period)}"
    )


def _period_cpm(title: str, period: PeriodStats, total: bool) -> str:
    prefix = "Total " if total else ""
    return (
        f"{title}\n\n"
        f"💵 CPM: ${cpm(period)}\n"
        f"📈 {prefix}Views: {period.views}\n"
        f"💰 {prefix}Earnings: ${_plain(period.earnings)}\n\n"
        "CPM = Cost Per Mille (per 1000 views)"
    )


def _period_views(title: str, period: PeriodStats) -> str:
    return (
        f"{title}\n\n"
        f"👁️ Total Views: {period.views}\n"
        f"💰 Earnings: ${_plain(period.earnings)}\n"
        f"📊 Revenue per view: ${per_view(period)}"
    )


def format_balance_details(report: BalanceReport) -> str:
    balances = report.balances
    return (
        "💰 Balance Details:\n\n"
        f"📊 Publisher Earnings: ${_plain(balances.publisher_earnings)}\n"
        f"🤝 Referral Earnings: ${_plain(balances.referral_earnings)}\n"
        f"📢 Advertiser Balance: ${_plain(balances.advertiser_balance)}\n"
        f"💳 Wallet Money: ${_plain(balances.wallet_money)}\n\n"
        f"💵 Total Available: ${balances.total:.3f}"
    )


def format_view(view: str, report: BalanceReport) -> str:
    """Render the detail text behind one overview button."""

    if view == "today":
        return _period_views("📈 Today's Views:", report.today)
    if view == "today_earnings":
        return _period_earnings("📈 Today's Performance:", report.today, total=False)
    if view == "today_cpm":
        return _period_cpm("📊 Today's CPM Analysis:", report.today, total=False)
    if view == "month":
        return _period_views("📅 This Month's Views:", report.this_month)
    if view == "month_earnings":
        return _period_earnings("📅 This Month's Performance:", report.this_month, total=True)
    if view == "month_cpm":
        return _period_cpm("📊 This Month's CPM Analysis:", report.this_month, total=True)
    if view == "balance":
        return format_balance_details(report)
    raise ValueError(f"Unsupported balance view: {view}")
