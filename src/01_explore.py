import pandas as pd

import hazard_config as cfg
from hazard_data import load_csv_safely, find_col

# -----------------------------
# LOAD
# -----------------------------
print("📂 Loading dataset:", cfg.HAZARD_PATH)
df = load_csv_safely(cfg.HAZARD_PATH)
print("✅ Loaded")

# -----------------------------
# BASIC OVERVIEW
# -----------------------------
print("\n📊 SHAPE")
print("Rows, Cols:", df.shape)

print("\n🧾 COLUMNS")
print(df.columns.tolist())

print("\n🔍 SAMPLE ROWS")
with pd.option_context("display.width", 160, "display.max_columns", 20):
    print(df.head(5))

# -----------------------------
# MISSING VALUES
# -----------------------------
print("\n⚠️ TOP 20 MISSING VALUE COUNTS")
missing = df.isna().sum().sort_values(ascending=False)
print(missing.head(20))

# -----------------------------
# DATA TYPES
# -----------------------------
print("\n🧠 DATA TYPES")
print(df.dtypes)

# -----------------------------
# WHERE ARE THE ZONES?
# -----------------------------
print("\n📌 QUICK CATEGORY SNAPSHOT")
for label, candidates in [
    ("Country", cfg.COUNTRY_COLS),
    ("Province / State", cfg.PROVINCE_COLS),
    ("City", cfg.CITY_COLS),
]:
    col = find_col(df, candidates)
    if col:
        print(f"\n— {label} ({col}) top 10 —")
        print(df[col].value_counts().head(10))

severity_col = find_col(df, cfg.SEVERITY_COLS)
if severity_col:
    print(f"\n📈 {severity_col} describe")
    print(pd.to_numeric(df[severity_col], errors="coerce").describe())

print("\n✅ Exploration step complete.")
