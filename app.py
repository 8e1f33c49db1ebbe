import logging
from datetime import date

import pandas as pd
import streamlit as st

from src import config
from src.calendar_engine import MONTH_NAMES
from src.calendar_service import XLSX_MIME, generate_workbook
from src.db import init_db
from src.errors import CalendarError
from src.exporter import CATEGORY_FILL, month_frame
from src.holidays_repo import add_holiday, delete_holiday, list_holidays
from src.school_holidays_repo import (
    add_school_holiday_range, delete_school_holiday_range, list_school_holiday_ranges
)

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("calendar_app")

st.set_page_config(page_title="Excel Calendar Generator", page_icon="🇲🇾", layout="wide")
init_db()

st.title("🇲🇾 Excel Calendar Generator")
st.caption("Generate a yearly calendar with Malaysian public holidays and school holidays highlighted.")

tab_cal, tab_hol = st.tabs(["📅 Calendar", "🏖️ Holidays"])

# -------------------- CALENDAR --------------------
with tab_cal:
    st.subheader("Generate & Download")

    with st.form("calendar_form"):
        year = st.number_input(
            "Select Year",
            min_value=config.YEAR_MIN,
            max_value=config.YEAR_MAX,
            value=min(max(config.DEFAULT_YEAR, config.YEAR_MIN), config.YEAR_MAX),
            step=1,
            key="cal_year",
        )
        submitted = st.form_submit_button("Generate Excel", type="primary")

    if submitted:
        try:
            workbook = generate_workbook(year)
        except (CalendarError, ValueError) as e:
            logger.warning("Calendar generation failed for %s: %s", year, e)
            st.session_state.pop("last_workbook", None)
            st.error(str(e))
        else:
            st.session_state["last_workbook"] = {
                "year": int(year),
                "file_name": workbook.file_name,
                "data": workbook.data,
                "grids": workbook.grids,
            }

    last = st.session_state.get("last_workbook")
    if last is None:
        st.info("Pick a year and press 'Generate Excel'.")
    else:
        st.success(f"{last['file_name']} is ready ✅")
        st.download_button(
            "📊 Download Excel (.xlsx)",
            data=last["data"],
            file_name=last["file_name"],
            mime=XLSX_MIME,
            key="dl_calendar_xlsx",
        )

        st.markdown("---")
        st.markdown("### Preview")
        month = st.selectbox(
            "Month",
            list(MONTH_NAMES.keys()),
            format_func=lambda m: MONTH_NAMES[m],
            index=0,
            key="preview_month",
        )
        grid = last["grids"][int(month) - 1]
        df_month = month_frame(grid)

        # Cell colours follow the sheet: two frame rows per week (date, label)
        def style_by_category(df: pd.DataFrame) -> pd.DataFrame:
            styles = pd.DataFrame("", index=df.index, columns=df.columns)
            for week_idx, week in enumerate(grid.weeks()):
                for day in week:
                    css = f"background-color: #{CATEGORY_FILL[day.visual_category]};"
                    styles.iloc[2 * week_idx, day.column] = css
                    styles.iloc[2 * week_idx + 1, day.column] = css
            return styles

        st.dataframe(df_month.style.apply(style_by_category, axis=None), width="stretch", hide_index=True)

    with st.expander("What is in the file?", expanded=False):
        st.markdown(
            "- 12 monthly sheets in one file\n"
            "- Malaysian public holidays highlighted and labelled\n"
            "- School holidays shaded in blue\n"
            "- Space to write daily activities\n"
            "- Weekend columns marked in grey\n"
        )

# -------------------- HOLIDAYS --------------------
with tab_hol:
    st.subheader("Holiday Data")

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("### Public holidays")
        filter_year = st.number_input(
            "Year", min_value=config.YEAR_MIN, max_value=config.YEAR_MAX,
            value=date.today().year if config.YEAR_MIN <= date.today().year <= config.YEAR_MAX else config.YEAR_MIN,
            step=1, key="hol_year",
        )
        rows = list_holidays(year=int(filter_year))
        if not rows:
            st.info("No public holidays stored for this year.")
        else:
            st.dataframe(pd.DataFrame(rows), width="stretch", hide_index=True)

        with st.form("hol_add", clear_on_submit=True):
            h_day = st.date_input("Date", key="hol_day")
            h_label = st.text_input("Label", placeholder="e.g. Deepavali", key="hol_label")
            if st.form_submit_button("Add / update"):
                try:
                    add_holiday(h_day.isoformat(), h_label)
                except ValueError as e:
                    st.error(str(e))
                else:
                    st.success("Saved ✅")
                    st.rerun()

        if rows:
            to_delete = st.selectbox(
                "Delete holiday",
                [r["date"] for r in rows],
                format_func=lambda d: f"{d}  {next(r['label'] for r in rows if r['date'] == d)}",
                key="hol_del_pick",
            )
            if st.button("Delete", key="hol_del"):
                delete_holiday(to_delete)
                st.success("Deleted ✅")
                st.rerun()

    with col2:
        st.markdown("### School holiday ranges")
        ranges = list_school_holiday_ranges()
        if not ranges:
            st.info("No school holiday ranges stored.")
        else:
            st.dataframe(pd.DataFrame(ranges), width="stretch", hide_index=True)

        with st.form("sch_add", clear_on_submit=True):
            c1, c2 = st.columns(2)
            with c1:
                s_start = st.date_input("Start", key="sch_start")
            with c2:
                s_end = st.date_input("End (inclusive)", key="sch_end")
            s_note = st.text_input("Note", placeholder="e.g. Cuti Penggal 1", key="sch_note")
            if st.form_submit_button("Add range"):
                try:
                    add_school_holiday_range(s_start.isoformat(), s_end.isoformat(), s_note)
                except ValueError as e:
                    st.error(str(e))
                else:
                    st.success("Added ✅")
                    st.rerun()

        if ranges:
            rid = st.selectbox(
                "Delete range",
                [int(r["id"]) for r in ranges],
                format_func=lambda i: next(
                    f"{r['start_date']} .. {r['end_date']}  {r['note']}" for r in ranges if int(r["id"]) == i
                ),
                key="sch_del_pick",
            )
            if st.button("Delete range", key="sch_del"):
                delete_school_holiday_range(rid)
                st.success("Deleted ✅")
                st.rerun()
