"""
cli.py
======

Command-line interface for the BiblioMetric-Analyzer system.

This module provides an interactive text-based menu for:
- Analyzing a single researcher's article CSV (Option 1)
- Analyzing a multi-researcher article CSV with progress bar (Option 2)
- Ranking the analyzed cohort by any metric (Option 3)
- Cohort summary statistics (Option 4)
- Quick index calculation for a typed citation list (Option 5)
- Exporting the last cohort to CSV (Option 6)
- Clean exit (Option 7)

Workflow
--------
Typical usage sequence:
1. Analyze a cohort (Option 2) → 👥 one profile per researcher
2. Rank it (Option 3) → 🏆 top-N table
3. Summarize (Option 4) → 📊 cohort statistics
4. Export (Option 6) → 💾 CSV for spreadsheets/dashboards

Configuration (VIP journals, column names, reference year) is read from
.env via config.load_config().

Date: 11/2025
Version: 2.1
"""

import logging

import pandas as pd

from config import load_config
from data_processing import analyze_all, analyze_researcher, export_results, load_articles
from errors import BiblioMetricError
from metrics import g_index, h_index, i10_index, r_index, random_h_index
from ranking import rank_researchers, summarize_analysis

logger = logging.getLogger(__name__)

RANK_COLUMNS = ["rank", "researcher", "h_index", "g_index", "total_papers", "total_citations"]


def show_menu():
    """Display the standardized BiblioMetric-Analyzer menu."""
    print("\n=== 📊 BiblioMetric-Analyzer Menu ===")
    print("👤 1. Analyze a single researcher (CSV)")
    print("👥 2. Analyze multiple researchers (CSV)")
    print("🏆 3. Rank researchers")
    print("📊 4. Summary statistics")
    print("🧮 5. Quick index calculation")
    print("💾 6. Export last analysis to CSV")
    print("❌ 7. Exit")
    return input("Choose an option: ").strip()


def parse_citations(text):
    """'245, 187 156' → [245, 187, 156]"""
    return [int(token) for token in text.replace(",", " ").split()]


def option_5_quick_indices():
    """🧮 Option 5: indices for a citation list typed by the user"""
    raw = input("Enter citation counts (comma or space separated): ").strip()
    try:
        citations = parse_citations(raw)
    except ValueError:
        print("❌ Citation counts must be integers.")
        return

    if any(c < 0 for c in citations):
        print("❌ Citation counts must be non-negative.")
        return

    randomized = random_h_index(citations, seed=0)
    print(f"\nCitations: {', '.join(str(c) for c in citations)}")
    print(f"   • H-index:   {h_index(citations)}")
    print(f"   • G-index:   {g_index(citations)}")
    print(f"   • R-index:   {r_index(citations):.2f}")
    print(f"   • i10-index: {i10_index(citations)}")
    print(f"   • Random h (max/min/avg): "
          f"{randomized['maximum']}/{randomized['minimum']}/{randomized['average']}")


def main():
    """Main CLI loop with standardized emoji-styled output."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    config = load_config()
    cohort = None

    print("=== 📊 BiblioMetric-Analyzer CLI ===")
    while True:
        choice = show_menu()

        try:
            if choice == "1":
                path = input("Enter CSV path (single researcher): ").strip()
                profile = analyze_researcher(load_articles(path), config)
                print(f"\n✅ Profile for {profile.researcher}:")
                for name, value in profile.to_dict().items():
                    print(f"   • {name}: {value}")

            elif choice == "2":
                path = input("Enter CSV path (multiple researchers): ").strip()
                workers = input("Parallel workers [1]: ").strip()
                cohort = analyze_all(load_articles(path), config,
                                     max_workers=int(workers) if workers else None,
                                     show_progress=True)
                print(f"\n✅ Researchers analyzed: {len(cohort):,}")
                with pd.option_context("display.max_columns", None, "display.width", 140):
                    print(cohort.to_frame())

            elif choice in ("3", "4", "6") and cohort is None:
                print("\n❌ No cohort analyzed yet.")
                print("   👉 Run Option 2 first.")

            elif choice == "3" and len(cohort) == 0:
                print("\n❌ The last cohort has no researchers to rank.")

            elif choice == "3":
                metric = input("Rank by metric [h_index]: ").strip() or "h_index"
                top = input("Top N [10]: ").strip()
                ranked = rank_researchers(cohort, by=metric, top_n=int(top) if top else 10)
                print(f"\n🏆 Top {len(ranked)} researchers by {metric}:")
                print(ranked.to_frame()[RANK_COLUMNS].to_string(index=False))

            elif choice == "4":
                summary = summarize_analysis(cohort)
                print("\n📊 Summary statistics:")
                for name, value in summary.items():
                    print(f"   • {name}: {value}")

            elif choice == "5":
                option_5_quick_indices()

            elif choice == "6":
                filename = input("Output CSV [analysis_results.csv]: ").strip() or "analysis_results.csv"
                export_results(cohort, filename)
                print(f"\n✅ Data saved to:")
                print(f"   • {filename}")

            elif choice == "7":
                print("\n👋 Thanks for using BiblioMetric-Analyzer!")
                break

            else:
                print("\n❌ Invalid option. Please choose 1-7.")

        except (BiblioMetricError, OSError, ValueError) as ex:
            logger.debug("Menu action failed", exc_info=True)
            print(f"\n❌ {ex}")


if __name__ == "__main__":
    main()
