DEFAULT_CONFIG = {
    # -----------------------------
    # STAFFING (PBJ HPRD BREAKPOINTS)
    # -----------------------------
    # Level 1 is implicit: anything below the level-2 breakpoint.
    "staffing": {
        "total_hprd": {5: 4.09, 4: 3.88, 3: 3.35, 2: 2.82},
        "rn_hprd": {5: 0.75, 4: 0.55, 3: 0.50, 2: 0.48},
        "weekend_penalty_ratio": 0.93,   # weekend < 93% of weekday costs a star
        "national_average_cmi": None,    # set to enable case-mix adjustment
    },

    # -----------------------------
    # STAFFING RECOMMENDATION TRIGGERS
    # -----------------------------
    "staffing_rules": {
        "weekend_ratio_floor": 0.90,
        "weekend_ratio_target": 0.95,
        "rn_turnover_limit": 50.0,
        "rn_turnover_target": 30.0,
        "rn_turnover_critical": 60.0,    # summary flags RN turnover above this
        "total_turnover_limit": 60.0,
        "total_turnover_target": 40.0,
        "hours_per_fte": 8.0,
        "fte_cost_bands": {"high": 5.0, "medium": 2.0},
    },

    # -----------------------------
    # PDPM NURSING CASE-MIX INDICES
    # -----------------------------
    "nursing_cmis": {
        "ES3": 3.84, "ES2": 2.25, "ES1": 1.43,
        "HDE2": 1.93, "HDE1": 1.51,
        "HBC2": 1.41, "HBC1": 1.14,
        "CA2": 1.39, "CA1": 1.14,
        "BB2": 1.08, "BB1": 0.93,
        "PE2": 1.06, "PE1": 0.89,
        "PA2": 0.83, "PA1": 0.62,
    },

    # -----------------------------
    # QUALITY MEASURE BENCHMARKS
    # -----------------------------
    # For higher_is_worse measures the tiers ascend (excellent lowest);
    # for higher-is-better measures they descend.
    "quality_measures": {
        "antipsychotic": {
            "name": "Antipsychotic Medication Use",
            "cms_code": "N031.04",
            "national_average": 14.2,
            "benchmarks": {"excellent": 8, "good": 12, "average": 15, "poor": 20},
            "higher_is_worse": True,
        },
        "pressure_ulcers": {
            "name": "Pressure Ulcers (High-Risk)",
            "cms_code": "N045.01",
            "national_average": 5.5,
            "benchmarks": {"excellent": 3, "good": 5, "average": 7, "poor": 10},
            "higher_is_worse": True,
        },
        "falls": {
            "name": "Falls",
            "cms_code": None,
            "national_average": None,
            "benchmarks": {"excellent": 18, "good": 22, "average": 26, "poor": 30},
            "higher_is_worse": True,
        },
        "major_falls": {
            "name": "Falls with Major Injury",
            "cms_code": "N043.01",
            "national_average": 3.4,
            "benchmarks": {"excellent": 1.5, "good": 2.5, "average": 3.5, "poor": 5},
            "higher_is_worse": True,
        },
        "catheter": {
            "name": "Indwelling Catheter",
            "cms_code": "N026.03",
            "national_average": 1.6,
            "benchmarks": {"excellent": 1, "good": 2, "average": 3, "poor": 5},
            "higher_is_worse": True,
        },
        "uti": {
            "name": "Urinary Tract Infection",
            "cms_code": "N024.02",
            "national_average": 2.6,
            "benchmarks": {"excellent": 1.5, "good": 3, "average": 4, "poor": 6},
            "higher_is_worse": True,
        },
        "restraints": {
            "name": "Physical Restraints",
            "cms_code": "N029.02",
            "national_average": 0.2,
            "benchmarks": {"excellent": 0, "good": 0.2, "average": 0.5, "poor": 1},
            "higher_is_worse": True,
        },
        "adl_decline": {
            "name": "Increased Need for Help with ADLs",
            "cms_code": "N028.03",
            "national_average": 15.0,
            "benchmarks": {"excellent": 10, "good": 14, "average": 17, "poor": 22},
            "higher_is_worse": True,
        },
        "depression": {
            "name": "Depressive Symptoms",
            "cms_code": "N036.01",
            "national_average": 5.0,
            "benchmarks": {"excellent": 2, "good": 4, "average": 6, "poor": 8},
            "higher_is_worse": True,
        },
        "weight_loss": {
            "name": "Weight Loss",
            "cms_code": "N041.01",
            "national_average": 5.5,
            "benchmarks": {"excellent": 3, "good": 5, "average": 7, "poor": 10},
            "higher_is_worse": True,
        },
        "rehospitalization": {
            "name": "Rehospitalization",
            "cms_code": "S015.01",
            "national_average": 21.0,
            "benchmarks": {"excellent": 15, "good": 18, "average": 22, "poor": 28},
            "higher_is_worse": True,
        },
        "discharge_to_community": {
            "name": "Discharge to Community",
            "cms_code": "S019.02",
            "national_average": 54.0,
            "benchmarks": {"excellent": 65, "good": 58, "average": 52, "poor": 45},
            "higher_is_worse": False,
        },
        "functional_improvement": {
            "name": "Functional Improvement",
            "cms_code": "S024.02",
            "national_average": 74.0,
            "benchmarks": {"excellent": 85, "good": 78, "average": 72, "poor": 65},
            "higher_is_worse": False,
        },
        "new_antipsychotic": {
            "name": "New Antipsychotic Medication",
            "cms_code": "N011.03",
            "national_average": 1.8,
            "benchmarks": {"excellent": 0.5, "good": 1.5, "average": 2.5, "poor": 4},
            "higher_is_worse": True,
        },
        "flu_vaccine": {
            "name": "Influenza Vaccination",
            "cms_code": None,
            "national_average": None,
            "benchmarks": {"excellent": 98, "good": 95, "average": 90, "poor": 80},
            "higher_is_worse": False,
        },
    },

    # Total QM points -> star level
    "qm_point_thresholds": {5: 1800, 4: 1400, 3: 1000, 2: 600},

    # -----------------------------
    # HEALTH INSPECTION SCORING
    # -----------------------------
    "health_inspection": {
        "deficiency_points": {
            "A": {"isolated": 0, "pattern": 0, "widespread": 0},
            "B": {"isolated": 0, "pattern": 0, "widespread": 0},
            "C": {"isolated": 0, "pattern": 0, "widespread": 0},
            "D": {"isolated": 4, "pattern": 8, "widespread": 16},
            "E": {"isolated": 8, "pattern": 16, "widespread": 24},
            "F": {"isolated": 16, "pattern": 32, "widespread": 48},
            "G": {"isolated": 20, "pattern": 40, "widespread": 80},
            "H": {"isolated": 35, "pattern": 70, "widespread": 140},
            "I": {"isolated": 45, "pattern": 90, "widespread": 150},
            "J": {"isolated": 50, "pattern": 100, "widespread": 150},
            "K": {"isolated": 100, "pattern": 150, "widespread": 150},
            "L": {"isolated": 150, "pattern": 150, "widespread": 150},
        },
        # Provenance unclear; override per deployment.
        "repeat_deficiency_multiplier": 1.5,
        "cycle_weights": [0.75, 0.25],
        "repeat_category_minimum": 2,
    },

    # -----------------------------
    # GG DISCHARGE FUNCTION REGRESSION
    # -----------------------------
    "gg_regression": {
        "intercept": 23.45,
        "admission_points": 0.65,
        "age": {"under_65": 2.5, "65_74": 1.5, "75_84": 0.0, "85_plus": -2.0},
        "diagnosis": {
            "hip_fracture": 3.2,
            "stroke": -1.5,
            "joint_replacement": 4.5,
            "medical_complex": -2.0,
            "other": 0.0,
        },
        "bims": {"intact": 2.0, "moderate": 0.0, "severe": -3.5},
        "comorbidities": {
            "diabetes": -0.5,
            "heart_failure": -1.0,
            "copd": -0.8,
            "renal": -1.2,
            "dementia": -2.5,
        },
        # length of stay in days: under 7, 7..20, 21 and over
        "length_of_stay": {"under_7": -2.0, "7_20": 0.0, "21_plus": 1.0},
        "score_range": [0, 150],
        # (minimum observed - expected, projected QM points)
        "projected_points": [[10, 150], [5, 130], [0, 110], [-5, 80], [-10, 50]],
        "projected_points_floor": 20,
    },

    # -----------------------------
    # FACILITY SUMMARY
    # -----------------------------
    "summary": {
        "strong_total_hprd": 4.0,        # "Exceeds recommended staffing levels"
        "low_antipsychotic": 10.0,       # "Low antipsychotic use"
    },

    # -----------------------------
    # RATING PROJECTION
    # -----------------------------
    "projection": {
        "damping": 0.5,
        "weights": {"health_inspection": 0.4, "staffing": 0.3, "quality_measures": 0.3},
    },
}
