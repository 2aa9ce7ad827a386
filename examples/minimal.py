"""
Minimal example fingerprinting a small dataset.

Run this with:
    python examples/minimal.py
"""

import pandas as pd

from unf import UnfConfig, add_unfs, unf_dataframe_set, unf_dates, unf_numbers


def main() -> None:
    df = pd.DataFrame(
        {
            "id": [1, 2, 3],
            "price": [9.99, 12.5, None],
            "city": ["Oslo", "Lima", "Pune"],
        }
    )

    # One fingerprint per column plus the dataset fingerprint
    result = unf_dataframe_set(df)
    for name, fp in zip(df.columns, result.column_fingerprints):
        print(f"{name:>6}: {fp}")
    print(f"dataset: {result.fingerprint}")

    # Representation does not matter, only values
    print(unf_numbers([1, 2, 3]) == unf_numbers([1.0, 2.00, 3e0]))

    # Dates in different layouts fingerprint alike once normalized
    us = unf_dates(["01/05/2021"], "MM/dd/yyyy")
    iso = unf_dates(["2021-01-05"], "yyyy-MM-dd")
    print(us == iso)

    # Non-default parameters are recorded in the fingerprint
    precise = unf_numbers([3.14159265358979], UnfConfig(digits=12))
    print(precise)

    # Columns computed separately combine into the dataset fingerprint
    print(add_unfs(list(result.column_fingerprints)) == result.fingerprint)


if __name__ == "__main__":
    main()
