"""
Reference datasets for examples and validation.
EXACT port of R's datasets::ToothGrowth.

ToothGrowth: length of odontoblasts in 60 guinea pigs, each receiving one
of three vitamin C doses (0.5, 1, 2 mg/day) by one of two delivery
methods (orange juice "OJ" or ascorbic acid "VC"). Ten animals per cell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import pandas as pd


# From R: data(ToothGrowth)$len - EXACT VALUES, in R's row order
tooth_growth_len = np.array([
    # VC, dose 0.5
    4.2, 11.5, 7.3, 5.8, 6.4, 10.0, 11.2, 11.2, 5.2, 7.0,
    # VC, dose 1
    16.5, 16.5, 15.2, 17.3, 22.5, 17.3, 13.6, 14.5, 18.8, 15.5,
    # VC, dose 2
    23.6, 18.5, 33.9, 25.5, 26.4, 32.5, 26.7, 21.5, 23.3, 29.5,
    # OJ, dose 0.5
    15.2, 21.5, 17.6, 9.7, 14.5, 10.0, 8.2, 9.4, 16.5, 9.7,
    # OJ, dose 1
    19.7, 23.3, 23.6, 26.4, 20.0, 25.2, 25.8, 21.2, 14.5, 27.3,
    # OJ, dose 2
    25.5, 26.4, 22.4, 24.5, 24.8, 30.9, 26.4, 27.3, 29.4, 23.0,
])

tooth_growth_supp = np.repeat(np.array(["VC", "OJ"]), 30)

tooth_growth_dose = np.tile(np.repeat(np.array([0.5, 1.0, 2.0]), 10), 2)


def tooth_growth() -> 'pd.DataFrame':
    """
    ToothGrowth as a DataFrame with columns len, supp, dose.

    ``supp`` is categorical with R's level order (OJ, VC).
    """
    import pandas as pd

    return pd.DataFrame({
        "len": tooth_growth_len.copy(),
        "supp": pd.Categorical(tooth_growth_supp, categories=["OJ", "VC"]),
        "dose": tooth_growth_dose.copy(),
    })
