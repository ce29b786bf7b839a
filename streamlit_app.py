from datetime import date

import pandas as pd
import streamlit as st

# Configuration
from retail_loyalty.config import get_config

from retail_loyalty.data.errors import DataAccessError
from retail_loyalty.data.models import LineItem
from retail_loyalty.data.util import get_data_access
from retail_loyalty.integrations.tally import TallyExporter
from retail_loyalty.reports.service import daily_report_pdf, monthly_report_pdf
from retail_loyalty.services.checkout import CheckoutRequest, CheckoutService
from retail_loyalty.services.privilege_cards import issue_privilege_card, render_privilege_card

st.set_page_config(page_title="Loyalty Desk", layout="wide")

# -----------------------------------------------------------------------------
# Backend wiring (CSV for local dev). One exporter per server process.
# -----------------------------------------------------------------------------
config = get_config()
da = get_data_access()


@st.cache_resource
def _exporter() -> TallyExporter:
    return TallyExporter()


checkout_service = CheckoutService(da, exporter=_exporter())
currency = config.currency_label

tab_order, tab_cards, tab_reports = st.tabs(["Order generation", "Privilege cards", "Reports"])

# -----------------------------------------------------------------------------
# Order generation
# -----------------------------------------------------------------------------
with tab_order:
    c1, c2, c3 = st.columns(3)
    customer_id = c1.text_input("Customer ID")
    customer_name = c2.text_input("Customer name")
    pc_number = c3.text_input("Privilege card number (optional)")

    card = None
    if customer_id.strip():
        card = checkout_service.find_card(customer_id.strip(), pc_number.strip() or None)
    if card is not None:
        st.info(f"Privilege card {card.pc_number}: {card.loyalty_points} points available")
    elif pc_number.strip():
        st.warning("No privilege card with that number for this customer, the bill will not earn or redeem points.")

    st.markdown("### Line items")
    # Free-text columns: malformed prices or quantities count as zero
    cart = st.data_editor(
        pd.DataFrame([{"name": "", "category": "", "price": "", "quantity": ""}]),
        num_rows="dynamic",
        use_container_width=True,
        key="cart",
    )
    line_items = [LineItem.model_validate(row) for row in cart.to_dict(orient="records")]

    c1, c2 = st.columns(2)
    advance = c1.text_input("Advance paid", value="0")
    redeem = c2.checkbox("Redeem loyalty points", disabled=card is None)

    settlement = checkout_service.preview(line_items, advance, redeem, card)
    amounts, loyalty = settlement.amounts, settlement.loyalty

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total", f"{currency} {amounts.total_amount:,.2f}")
    k2.metric("Remaining balance", f"{currency} {amounts.remaining_balance:,.2f}")
    k3.metric("Loyalty discount", f"{currency} {amounts.discount:,.2f}")
    k4.metric("Amount due", f"{currency} {amounts.final_amount:,.2f}")
    if card is not None:
        st.caption(
            f"Points redeemed: {loyalty.points_to_redeem} | earned: {loyalty.points_to_add} | "
            f"balance after bill: {loyalty.updated_points}"
        )

    payment_method = st.selectbox("Payment method", ["cash", "card", "upi"])
    if st.button("Generate bill", type="primary", disabled=not customer_id.strip()):
        result = checkout_service.checkout(
            CheckoutRequest(
                customer_id=customer_id.strip(),
                customer_name=customer_name.strip() or customer_id.strip(),
                line_items=line_items,
                advance_amount=advance,
                redeem=redeem,
                pc_number=pc_number.strip() or None,
                payment_method=payment_method,
            )
        )
        st.success(f"Bill saved: {currency} {result.billing_record.final_amount:,.2f} collected")
        if result.privilege_card is not None:
            st.write(f"New points balance: {result.privilege_card.loyalty_points}")

# -----------------------------------------------------------------------------
# Privilege cards
# -----------------------------------------------------------------------------
with tab_cards:
    with st.form("new_card"):
        c1, c2 = st.columns(2)
        new_pc = c1.text_input("Card number")
        new_customer = c2.text_input("Customer ID", key="card_customer")
        new_name = c1.text_input("Name on card")
        new_phone = c2.text_input("Phone")
        opening_points = st.text_input("Opening points", value="0")
        submitted = st.form_submit_button("Create privilege card")

    if submitted:
        try:
            created = issue_privilege_card(
                da, new_pc.strip(), new_customer.strip(), new_name.strip(), new_phone.strip() or None, opening_points
            )
        except (DataAccessError, ValueError) as e:
            st.error(f"Could not create card: {e}")
        else:
            st.success(f"Privilege card {created.pc_number} created")
            st.image(render_privilege_card(created))

    st.markdown("### Download an existing card")
    lookup = st.text_input("Card number", key="card_lookup")
    if lookup.strip():
        existing = da.get_privilege_card(lookup.strip())
        if existing is None:
            st.warning("No such card.")
        else:
            st.download_button(
                "Download card image",
                data=render_privilege_card(existing),
                file_name=f"{existing.pc_number}.png",
                mime="image/png",
            )

# -----------------------------------------------------------------------------
# Reports
# -----------------------------------------------------------------------------
with tab_reports:
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("### Daily report")
        day = st.date_input("Day", value=date.today())
        st.download_button(
            "Download daily report",
            data=daily_report_pdf(da, day),
            file_name="daily_report.pdf",
            mime="application/pdf",
        )
    with c2:
        st.markdown("### Monthly report")
        today = date.today()
        year = st.number_input("Year", min_value=2000, max_value=2100, value=today.year, step=1)
        month = st.number_input("Month", min_value=1, max_value=12, value=today.month, step=1)
        st.download_button(
            "Download monthly report",
            data=monthly_report_pdf(da, int(year), int(month)),
            file_name="monthly_report.pdf",
            mime="application/pdf",
        )

# -----------------------------------------------------------------------------
# Footer
# -----------------------------------------------------------------------------
with st.expander("Data source"):
    st.write(
        f"Privilege cards, bills and work orders are stored as CSV files under `{config.data_dir}/`. "
        f"Tally export is {'enabled' if config.tally_enabled else 'disabled'} ({config.tally_url})."
    )
