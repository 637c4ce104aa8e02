"""Analytics view component - renders charts and tables."""
from __future__ import annotations
from typing import List

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from core.config import config
from core.logger import get_logger
from core.utils import format_currency, format_percent
from models.schema import AnalysisSummary, Transaction
from models.views import CategoryDeepDive, DashboardViews, MerchantTotal, MonthlyCategoryRow

log = get_logger("ui/components/analytics_view")

LEGEND = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)


def render(views: DashboardViews, summary: AnalysisSummary, currency: str | None = None) -> None:
    """
    Render the dashboard for one set of derived views.

    Args:
        views: Views computed for the current filter state
        summary: Server-side aggregates returned with the analysis
        currency: Currency code used for display only
    """
    currency = currency or config.currency

    st.subheader("📈 Overview")
    _render_kpi_cards(summary, views, currency)

    st.divider()

    st.subheader("📊 Spending")
    chart_tab1, chart_tab2, chart_tab3 = st.tabs([
        "Monthly by Category",
        "Top Merchants",
        "Category Split",
    ])

    with chart_tab1:
        _render_monthly_by_category(views.monthly, views.filters.category_filter, currency)

    with chart_tab2:
        _render_merchant_ranking(views.merchants, currency)

    with chart_tab3:
        _render_category_split(summary, currency)

    st.divider()

    st.subheader("🔎 Category Deep Dive")
    _render_deep_dive(views.deep_dive, currency)

    st.divider()

    st.subheader("📋 Transactions")
    _render_transactions(views.search_results, views.filters.search_query, currency)

    _render_flags_and_recommendations(summary, currency)


def _render_kpi_cards(summary: AnalysisSummary, views: DashboardViews, currency: str) -> None:
    """Render KPI metric cards from the server aggregates."""
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            label="Total Spent",
            value=format_currency(summary.total_spent, currency),
            help="Total spend across all uploaded statements",
        )

    with col2:
        st.metric(
            label="Avg Monthly Spend",
            value=format_currency(summary.avg_monthly_spend, currency),
        )

    with col3:
        st.metric(
            label="Discretionary",
            value=format_currency(summary.discretionary_spent, currency),
            help="Spend the analyzer classified as discretionary",
        )

    with col4:
        st.metric(
            label="Months",
            value=f"{len(views.monthly)}",
            help="Calendar months with transactions under the current category filter",
        )

    if summary.card_spend:
        with st.expander("💳 Spend by card"):
            card_df = pd.DataFrame(
                [{"Card": card, "Spend": format_currency(amount, currency)} for card, amount in summary.card_spend.items()]
            )
            st.dataframe(card_df, use_container_width=True, hide_index=True)


def monthly_frame(rows: tuple[MonthlyCategoryRow, ...]) -> pd.DataFrame:
    """Months as the index, one float column per category."""
    index = pd.Index([row.month for row in rows], name="month")
    return pd.DataFrame([row.totals for row in rows], index=index).fillna(0).astype(float)


def _render_monthly_by_category(rows: tuple[MonthlyCategoryRow, ...], category_filter: str, currency: str) -> None:
    """Stacked monthly bars, one trace per category."""
    st.markdown(f"### 🗓️ Monthly Spending — {category_filter}")

    if not rows:
        st.info("📊 No transactions for this selection.")
        return

    df = monthly_frame(rows)

    fig = go.Figure()
    for category in df.columns:
        fig.add_trace(go.Bar(x=df.index, y=df[category], name=category))

    fig.update_layout(
        xaxis_title="Month",
        yaxis_title=f"Amount ({currency})",
        barmode="relative",
        hovermode="x unified",
        height=450,
        legend=LEGEND,
    )
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("📊 View Data Table"):
        table = df.copy()
        table.insert(len(table.columns), "Total" if "Total" not in df.columns else "Month total", df.sum(axis=1))
        st.dataframe(
            table.apply(lambda col: col.map(lambda x: format_currency(x, currency))),
            use_container_width=True,
        )


def _merchant_frame(merchants: tuple[MerchantTotal, ...], currency: str) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Merchant": m.merchant,
                "Total": format_currency(m.total, currency),
                "Transactions": m.count,
            }
            for m in merchants
        ]
    )


def _render_merchant_ranking(merchants: tuple[MerchantTotal, ...], currency: str) -> None:
    """Horizontal bar chart of the top merchants by spend."""
    st.markdown("### 🏪 Top Merchants")

    if not merchants:
        st.info("No spending transactions yet.")
        return

    # plotly draws the first bar at the bottom
    ordered = list(reversed(merchants))
    fig = go.Figure(go.Bar(
        x=[float(m.total) for m in ordered],
        y=[m.merchant for m in ordered],
        orientation="h",
        marker_color="#8884d8",
        text=[format_currency(m.total, currency) for m in ordered],
        textposition="auto",
    ))
    fig.update_layout(
        xaxis_title=f"Total ({currency})",
        height=max(300, 32 * len(ordered)),
        margin=dict(l=10, r=10, t=30, b=10),
    )
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(_merchant_frame(merchants, currency), use_container_width=True, hide_index=True)


def _render_category_split(summary: AnalysisSummary, currency: str) -> None:
    """Pie of the analyzer's per-category spend."""
    st.markdown("### 🥧 Spending Categories")

    if not summary.category_spend:
        st.info("The analyzer did not return a category breakdown.")
        return

    labels = list(summary.category_spend.keys())
    values = list(summary.category_spend.values())
    fig = go.Figure(go.Pie(labels=labels, values=values, hole=0.35))
    fig.update_layout(height=420, legend=LEGEND)
    st.plotly_chart(fig, use_container_width=True)

    if summary.category_summary_percent:
        share_df = pd.DataFrame(
            [
                {
                    "Category": category,
                    "Spend": format_currency(summary.category_spend.get(category, 0), currency),
                    "Share": format_percent(percent),
                }
                for category, percent in summary.category_summary_percent.items()
            ]
        )
        st.dataframe(share_df, use_container_width=True, hide_index=True)


def _render_deep_dive(deep_dive: CategoryDeepDive, currency: str) -> None:
    """Statistics, trend and top merchants of the selected category."""
    if deep_dive.category is None:
        st.info("Pick a category above to see its details.")
        return

    if deep_dive.is_empty:
        st.info(f"No spending recorded under **{deep_dive.category}**.")
        return

    stats = deep_dive.stats
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total", format_currency(stats.total, currency))
    with col2:
        st.metric("Avg Monthly", format_currency(stats.avg_monthly, currency))
    with col3:
        st.metric("Transactions", f"{stats.transaction_count:,}")

    fig = go.Figure(go.Scatter(
        x=[p.month for p in deep_dive.trend],
        y=[float(p.amount) for p in deep_dive.trend],
        mode="lines+markers",
        line=dict(color="#3b82f6", width=3),
        marker=dict(size=8),
        name=deep_dive.category,
    ))
    fig.update_layout(
        title=f"{deep_dive.category} by Month",
        xaxis_title="Month",
        yaxis_title=f"Amount ({currency})",
        hovermode="x unified",
        height=380,
    )
    st.plotly_chart(fig, use_container_width=True)

    st.markdown("**Top merchants in this category**")
    st.dataframe(_merchant_frame(deep_dive.merchants, currency), use_container_width=True, hide_index=True)


def _transactions_frame(transactions: tuple[Transaction, ...], currency: str) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Date": t.date.isoformat(),
                "Post Date": t.post_date.isoformat() if t.post_date else "-",
                "Merchant": t.merchant,
                "Amount": format_currency(t.amount, currency),
                "Category": t.category,
                "Statement": t.source_file,
            }
            for t in transactions
        ],
        columns=["Date", "Post Date", "Merchant", "Amount", "Category", "Statement"],
    )


def _render_transactions(results: tuple[Transaction, ...], query: str, currency: str) -> None:
    """Transaction table, filtered by the search box."""
    if query.strip():
        st.caption(f"{len(results):,} transaction(s) matching “{query.strip()}”")
    else:
        st.caption(f"{len(results):,} transaction(s)")

    if not results:
        st.info("No transactions found.")
        return

    st.dataframe(_transactions_frame(results, currency), use_container_width=True, hide_index=True)


def _render_flags_and_recommendations(summary: AnalysisSummary, currency: str) -> None:
    suspicious = summary.flags.suspicious
    recommendations: List[str] = summary.global_recommendations

    if not suspicious and not recommendations:
        return

    st.divider()
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("#### 🚩 Flagged Transactions")
        if suspicious:
            flag_df = pd.DataFrame(
                [
                    {
                        "Date": flag.date or "-",
                        "Merchant": flag.merchant or "-",
                        "Amount": format_currency(flag.amount, currency) if flag.amount is not None else "-",
                        "Reason": flag.reason or "-",
                    }
                    for flag in suspicious
                ]
            )
            st.dataframe(flag_df, use_container_width=True, hide_index=True)
        else:
            st.caption("Nothing looked unusual.")

    with col2:
        st.markdown("#### 💡 Recommendations")
        if recommendations:
            for tip in recommendations:
                st.markdown(f"- {tip}")
        else:
            st.caption("No recommendations.")
