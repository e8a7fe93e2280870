"""
Bundled price list — all amounts in NOK.

Source: supplier price list (pump, drive, valve and service sections).
Override at runtime by pointing settings.CATALOG_PATH at a JSON file
with the same shape.
"""

CATALOG_VERSION = "2025-pricelist"

# --- Anti-heeling systems ---

ANTI_HEELING = {
    "pumps": {
        "RBP-250": 57500,
        "RBP-300": 63000,
        "RBP-400": 99000,
    },
    # Flange type is recorded on the quote but does not change the pump price
    "flange_types": ["DIN PN10", "DIN PN16", "JIS 10K", "ANSI 150"],
    "motors": {
        "Non-EX": [
            {"model": "160MLA", "kw": 15, "type": "N", "price": 11000},
            {"model": "160MLB", "kw": 18.5, "type": "N", "price": 13350},
            {"model": "160MLC", "kw": 22, "type": "N", "price": 14450},
            {"model": "160MLD", "kw": 25, "type": "HO", "price": 15200},
            {"model": "180MLA", "kw": 27, "type": "N", "price": 16700},
            {"model": "160MLE", "kw": 30, "type": "HO", "price": 18150},
            {"model": "180MLB", "kw": 35, "type": "HO", "price": 21000},
            {"model": "200MLA", "kw": 37, "type": "N", "price": 23300},
            {"model": "200MLB", "kw": 45, "type": "N", "price": 28260},
            {"model": "200MLC", "kw": 52, "type": "HO", "price": 31000},
            {"model": "225SMA", "kw": 55, "type": "N", "price": 34100},
            {"model": "200MLD", "kw": 60, "type": "HO", "price": 50000},
            {"model": "225SMB", "kw": 65, "type": "HO", "price": 52000},
            {"model": "225SMC", "kw": 82, "type": "HO", "price": 54000},
            {"model": "225SMD", "kw": 85, "type": "HO", "price": 58000},
            {"model": "250SMB", "kw": 86, "type": "HO", "price": 60000},
            {"model": "250SMA", "kw": 90, "type": "N", "price": 60000},
            {"model": "250SMC", "kw": 99, "type": "HO", "price": 67000},
            {"model": "280SMB", "kw": 110, "type": "N", "price": 71550},
            {"model": "280SMC", "kw": 125, "type": "HO", "price": 78000},
            {"model": "280MLA", "kw": 132, "type": "N", "price": 85000},
            {"model": "280MLB", "kw": 160, "type": "HO", "price": 106500},
            {"model": "280MLB", "kw": 200, "type": "N", "price": 126000},
        ],
        # iict4: EX surcharge added on top of the base price
        "EX-Proof": [
            {"model": "160MLB", "kw": 18.5, "type": "N", "price": 32500, "iict4": 3000},
            {"model": "160MLC", "kw": 22, "type": "N", "price": 37800, "iict4": 3000},
            {"model": "180MLB", "kw": 30, "type": "HO", "price": 47700, "iict4": 3000},
            {"model": "200MLA", "kw": 37, "type": "N", "price": 58000, "iict4": 5000},
            {"model": "180MLC", "kw": 45, "type": "HO", "price": 65000, "iict4": 5000},
            {"model": "225SMB", "kw": 55, "type": "N", "price": 80000, "iict4": 7000},
            {"model": "225SMD", "kw": 75, "type": "HO", "price": 92300, "iict4": 8000},
            {"model": "280SMA", "kw": 90, "type": "N", "price": 106200, "iict4": 8000},
            {"model": "280SMB", "kw": 110, "type": "N", "price": 138400, "iict4": 8000},
            {"model": "315SMA", "kw": 132, "type": "N", "price": 168000, "iict4": 13000},
            {"model": "315SMB", "kw": 160, "type": "N", "price": 203300, "iict4": 13000},
        ],
    },
    "starters": {
        "DOL": {
            "0-20kW": 22000,
            "20-60kW": 28000,
            "60-80kW": 34000,
            "80-100kW": 42000,
            "100-120kW": 46000,
            "120-150kW": 50000,
        },
        "SOFT": {
            "0-20kW": 31000,
            "20-60kW": 36000,
            "60-80kW": 41500,
            "80-100kW": 43000,
            "100-120kW": 52000,
            "120-150kW": 58800,
        },
        "YD": {
            "33kW Y/D": 46000,
            "70kW Y/D": 53000,
            "122kW Y/D": 60000,
            "132kW Y/D": 56000,
        },
        "VFD": {
            "75kW 690V IP55 R6 (incl. filter)": 48610,
            "90kW 690V IP55 R7 (incl. filter)": 54600,
            "110kW 690V IP55 R7 (incl. filter)": 58370,
            "132kW 690V IP55 R8 (incl. filter)": 66920,
            "160kW 690V IP55 R8 (incl. filter)": 74860,
            "160kW 380-500V IP55 R8": 76830,
        },
    },
    "level_switches": {
        "Std. switch for high/low level": 3000,
        "For tank top (20m cable)": 3000,
        "Transmitter (0110-0089-2)": 8700,
    },
    "valves_pneumatic": {
        "single": {
            "DN200 Wafer": 15808,
            "DN250 Wafer": 17472,
            "DN250 Lug": 19968,
            "DN250 Semi-Lug": 15808,
            "DN300 Wafer": 21133,
            "DN300 Lug": 23962,
            "DN350 Wafer": 25126,
            "DN350 Lug": 25126,
            "DN400 Wafer": 31616,
            "DN400 Lug": 36109,
            "DN450 Lug": 46925,
            "DN500 Lug": 58406,
        },
        "double": {
            "DN200 Wafer": 11520,
            "DN250 Wafer": 11904,
            "DN250 Lug": 12800,
            "DN250 Semi-Lug": 11520,
            "DN300 Wafer": 13696,
            "DN300 Lug": 16000,
            "DN350 Wafer": 16768,
            "DN350 Lug": 16768,
            "DN400 Wafer": 20480,
            "DN400 Lug": 22144,
            "DN450 Lug": 27648,
            "DN500 Lug": 31104,
        },
    },
    # Pure electric actuated valves; DN200 sizes are never offered electric
    "valves_electric": {
        "single": {
            "DN250 Wafer": 46150,
            "DN250 Lug": 47000,
            "DN250 DBL FLANGE": 48300,
            "DN300 Wafer": 53100,
            "DN300 Lug": 53680,
            "DN300 MONO": 53300,
            "DN300 DBL FLANGE": 53800,
            "DN350 Wafer": 58600,
            "DN350 Lug": 58600,
            "DN350 MONO": 58800,
            "DN350 DBL FLANGE": 59400,
            "DN400 Wafer": 66700,
            "DN400 Lug": 67100,
            "DN400 MONO": 67500,
            "DN400 DBL FLANGE": 68300,
            "DN450 Wafer": 73000,
            "DN450 Lug": 73200,
            "DN450 MONO": 73700,
            "DN450 DBL FLANGE": 74200,
            "DN500 Wafer": 80500,
            "DN500 Lug": 81735,
            "DN500 MONO": 84500,
            "DN500 DBL FLANGE (AFFCO)": 87000,
        },
        "double": {
            "DN250 Wafer": 12721.42857,
            "DN250 Lug": 13571.42857,
            "DN250 DBL FLANGE": 14871.42857,
            "DN300 Wafer": 16028.57143,
            "DN300 Lug": 16608.57143,
            "DN300 MONO": 16228.57143,
            "DN300 DBL FLANGE": 16728.57143,
            "DN350 Wafer": 19000,
            "DN350 Lug": 19000,
            "DN350 MONO": 19200,
            "DN350 DBL FLANGE": 19800,
            "DN400 Wafer": 22914.28571,
            "DN400 Lug": 23314.28571,
            "DN400 MONO": 23714.28571,
            "DN400 DBL FLANGE": 24514.28571,
            "DN450 Wafer": 26228.57143,
            "DN450 Lug": 26428.57143,
            "DN450 MONO": 26928.57143,
            "DN450 DBL FLANGE": 30000,
            "DN500 Wafer": 30771.42857,
            "DN500 Lug": 32006.42857,
            "DN500 MONO": 34771.42857,
            "DN500 DBL FLANGE (AFFCO)": 37271.42857,
        },
    },
    "pump_additions": {
        "Manometer": 3000,
    },
    "motor_additions": {
        "Top Hat, cast": 1500,
    },
    "starter_additions": {
        "Local switch": 5100,
    },
    "valve_extras": {
        "Cast steel body": 4000,
        "HandWheel": 4000,
    },
    "control_system": {
        "Standard desk mounting": 34000,
        "Slave desk mounting": 13000,
        "15\" screen": 7000,
        "ModBus (RS485)": 1100,
    },
    "measurement": {
        "Pump pressure in/out": 4000,
    },
    "other_equipment": {
        "EX-proof actuator": 3000,
        "EX-proof switch": 4000,
        "Counter flanges": 3000,
        "Spare parts": 0,
    },
}

# --- Cargo pumps (hydraulic deepwell), priced by type, length (m) and variant ---

CARGO_PUMPS = {
    "SD100": {
        "description": "50 - 120 m³/h",
        "prices": [
            {"length": 5, "CS": 165000, "CST": 166000, "CSTV": 172000},
            {"length": 6, "CS": 167000, "CST": 168000, "CSTV": 174000},
            {"length": 7, "CS": 168000, "CST": 169000, "CSTV": 176000},
            {"length": 8, "CS": 174000, "CST": 175000, "CSTV": 182000},
            {"length": 9, "CS": 175000, "CST": 176000, "CSTV": 184000},
            {"length": 10, "CS": 177000, "CST": 178000, "CSTV": 186000},
            {"length": 11, "CS": 178000, "CST": 180000, "CSTV": 188000},
            {"length": 12, "CS": 179000, "CST": 181000, "CSTV": 189000},
            {"length": 13, "CS": 181000, "CST": 183000, "CSTV": 191000},
            {"length": 14, "CS": 215000, "CST": 225000, "CSTV": 233000},
            {"length": 15, "CS": 216000, "CST": 226000, "CSTV": 235000},
            {"length": 16, "CS": 218000, "CST": 228000, "CSTV": 236000},
            {"length": 17, "CS": 223000, "CST": 233000, "CSTV": 243000},
            {"length": 18, "CS": 225000, "CST": 235000, "CSTV": 244000},
            {"length": 19, "CS": 226000, "CST": 237000, "CSTV": 246000},
            {"length": 20, "CS": 227000, "CST": 238000, "CSTV": 248000},
            {"length": 21, "CS": 229000, "CST": 240000, "CSTV": 250000},
            {"length": 22, "CS": 230000, "CST": 241000, "CSTV": 252000},
            {"length": 23, "CS": 232000, "CST": 243000, "CSTV": 254000},
            {"length": 24, "CS": 233000, "CST": 244000, "CSTV": 256000},
        ],
        "trunk": [
            {"name": "TRUNK H=500 SD100 T=12 MA EN 1.4432", "price": 2000},
            {"name": "TRUNK H=500 SD100 T=12 MA EN 1.4462", "price": 3000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD100 T=15 EN 1.4432", "price": 6000},
            {"name": "WELL SUCTION SD100 T=17 EN 1.4432", "price": 7000},
        ],
    },
    "SD125": {
        "description": "120 - 250 m³/h",
        "prices": [
            {"length": 5, "CS": 186000, "CST": 188000, "CSTV": 199000},
            {"length": 6, "CS": 188000, "CST": 190000, "CSTV": 201000},
            {"length": 7, "CS": 190000, "CST": 192000, "CSTV": 203000},
            {"length": 8, "CS": 195000, "CST": 198000, "CSTV": 209000},
            {"length": 9, "CS": 197000, "CST": 200000, "CSTV": 211000},
            {"length": 10, "CS": 199000, "CST": 202000, "CSTV": 214000},
            {"length": 11, "CS": 201000, "CST": 204000, "CSTV": 216000},
            {"length": 12, "CS": 203000, "CST": 206000, "CSTV": 218000},
            {"length": 13, "CS": 205000, "CST": 208000, "CSTV": 220000},
            {"length": 14, "CS": 241000, "CST": 247000, "CSTV": 259000},
            {"length": 15, "CS": 243000, "CST": 249000, "CSTV": 261000},
            {"length": 16, "CS": 245000, "CST": 251000, "CSTV": 264000},
            {"length": 17, "CS": 251000, "CST": 257000, "CSTV": 270000},
            {"length": 18, "CS": 253000, "CST": 259000, "CSTV": 272000},
            {"length": 19, "CS": 255000, "CST": 261000, "CSTV": 274000},
            {"length": 20, "CS": 257000, "CST": 263000, "CSTV": 276000},
            {"length": 21, "CS": 259000, "CST": 265000, "CSTV": 279000},
            {"length": 22, "CS": 261000, "CST": 267000, "CSTV": 281000},
            {"length": 23, "CS": 262000, "CST": 269000, "CSTV": 283000},
            {"length": 24, "CS": 264000, "CST": 271000, "CSTV": 285000},
        ],
        "trunk": [
            {"name": "TRUNK H=500 SD125 T=12 MA EN 1.4432", "price": 2000},
            {"name": "TRUNK H=500 SD125 T=12 MA EN 1.4462", "price": 4000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD125/150 T=15 EN 1.4432", "price": 9000},
            {"name": "WELL SUCTION SD125/150 T=17 EN 1.4432", "price": 9000},
        ],
    },
    "SD150": {
        "description": "250 - 385 m³/h",
        "prices": [
            {"length": 5, "CS": 193000, "CST": 197000, "CSTV": 204000},
            {"length": 6, "CS": 195000, "CST": 199000, "CSTV": 206000},
            {"length": 7, "CS": 197000, "CST": 201000, "CSTV": 209000},
            {"length": 8, "CS": 203000, "CST": 207000, "CSTV": 215000},
            {"length": 9, "CS": 205000, "CST": 209000, "CSTV": 218000},
            {"length": 10, "CS": 208000, "CST": 212000, "CSTV": 220000},
            {"length": 11, "CS": 210000, "CST": 214000, "CSTV": 222000},
            {"length": 12, "CS": 212000, "CST": 216000, "CSTV": 225000},
            {"length": 13, "CS": 214000, "CST": 218000, "CSTV": 227000},
            {"length": 14, "CS": 252000, "CST": 258000, "CSTV": 266000},
            {"length": 15, "CS": 254000, "CST": 260000, "CSTV": 268000},
            {"length": 16, "CS": 256000, "CST": 262000, "CSTV": 270000},
            {"length": 17, "CS": 262000, "CST": 268000, "CSTV": 277000},
            {"length": 18, "CS": 264000, "CST": 270000, "CSTV": 279000},
            {"length": 19, "CS": 266000, "CST": 273000, "CSTV": 281000},
            {"length": 20, "CS": 269000, "CST": 275000, "CSTV": 284000},
            {"length": 21, "CS": 271000, "CST": 277000, "CSTV": 286000},
            {"length": 22, "CS": 273000, "CST": 279000, "CSTV": 289000},
            {"length": 23, "CS": 275000, "CST": 282000, "CSTV": 291000},
            {"length": 24, "CS": 277000, "CST": 284000, "CSTV": 293000},
        ],
        "trunk": [
            {"name": "TRUNK H=500 SD150 T=12 MA EN 1.4432", "price": 2000},
            {"name": "TRUNK H=500 SD150 T=12 MA EN 1.4462", "price": 3000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD125/150 T=15 EN 1.4432", "price": 9000},
            {"name": "WELL SUCTION SD125/150 T=17 EN 1.4432", "price": 9000},
        ],
    },
    "SD200": {
        "description": "385 - 650 m³/h",
        "prices": [
            {"length": 14, "CS": 310000, "CST": 308000, "CSTV": 315000},
            {"length": 15, "CS": 313000, "CST": 313000, "CSTV": 320000},
            {"length": 16, "CS": 316000, "CST": 318000, "CSTV": 325000},
            {"length": 17, "CS": 324000, "CST": 328000, "CSTV": 336000},
            {"length": 18, "CS": 327000, "CST": 334000, "CSTV": 341000},
            {"length": 19, "CS": 330000, "CST": 339000, "CSTV": 346000},
            {"length": 20, "CS": 333000, "CST": 344000, "CSTV": 352000},
            {"length": 21, "CS": 336000, "CST": 349000, "CSTV": 357000},
            {"length": 22, "CS": 339000, "CST": 354000, "CSTV": 362000},
            {"length": 23, "CS": 342000, "CST": 359000, "CSTV": 367000},
            {"length": 24, "CS": 345000, "CST": 364000, "CSTV": 373000},
        ],
        "trunk": [
            {"name": "TRUNK H=500 SD200 T=12 MA EN 1.4432", "price": 4000},
            {"name": "TRUNK H=500 SD200 T=12 MA EN 1.4462", "price": 7000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD200 T=15 EN 1.4432", "price": 15000},
            {"name": "WELL SUCTION SD200 T=17 EN 1.4432", "price": 17000},
        ],
    },
    "SD250": {
        "description": "750 m³/h",
        "prices": [
            {"length": 14, "CS": 425000, "CST": 445000, "CSTV": 444000},
            {"length": 15, "CS": 428000, "CST": 449000, "CSTV": 448000},
            {"length": 16, "CS": 432000, "CST": 452000, "CSTV": 452000},
            {"length": 17, "CS": 443000, "CST": 464000, "CSTV": 464000},
            {"length": 18, "CS": 447000, "CST": 467000, "CSTV": 468000},
            {"length": 19, "CS": 450000, "CST": 471000, "CSTV": 472000},
            {"length": 20, "CS": 454000, "CST": 475000, "CSTV": 476000},
            {"length": 21, "CS": 458000, "CST": 479000, "CSTV": 480000},
            {"length": 22, "CS": 461000, "CST": 483000, "CSTV": 484000},
            {"length": 23, "CS": 465000, "CST": 486000, "CSTV": 488000},
            {"length": 24, "CS": 469000, "CST": 490000, "CSTV": 492000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD250 T=17 EN 1.4432", "price": 19000},
        ],
    },
    "SD250L": {
        "description": "900 m³/h",
        "prices": [
            {"length": 14, "CS": 516000, "CST": 521000, "CSTV": 532000},
            {"length": 15, "CS": 520000, "CST": 525000, "CSTV": 536000},
            {"length": 16, "CS": 523000, "CST": 529000, "CSTV": 540000},
            {"length": 17, "CS": 534000, "CST": 540000, "CSTV": 551000},
            {"length": 18, "CS": 538000, "CST": 544000, "CSTV": 555000},
            {"length": 19, "CS": 542000, "CST": 548000, "CSTV": 559000},
            {"length": 20, "CS": 546000, "CST": 551000, "CSTV": 563000},
            {"length": 21, "CS": 549000, "CST": 555000, "CSTV": 567000},
            {"length": 22, "CS": 553000, "CST": 559000, "CSTV": 571000},
            {"length": 23, "CS": 557000, "CST": 563000, "CSTV": 575000},
            {"length": 24, "CS": 560000, "CST": 567000, "CSTV": 579000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD250 T=17 EN 1.4432", "price": 19000},
        ],
    },
    "SD300L": {
        "description": "1250 m³/h",
        "prices": [
            {"length": 14, "CS": 621000, "CST": 634000},
            {"length": 15, "CS": 625000, "CST": 638000},
            {"length": 16, "CS": 630000, "CST": 643000},
            {"length": 17, "CS": 644000, "CST": 657000},
            {"length": 18, "CS": 648000, "CST": 661000},
            {"length": 19, "CS": 652000, "CST": 666000},
            {"length": 20, "CS": 657000, "CST": 670000},
            {"length": 21, "CS": 661000, "CST": 675000},
            {"length": 22, "CS": 666000, "CST": 679000},
            {"length": 23, "CS": 670000, "CST": 684000},
            {"length": 24, "CS": 674000, "CST": 688000},
        ],
        "optional_accessories": [
            {"name": "WELL SUCTION SD300 T=17 EN 1.4432", "price": 19000},
        ],
    },
    "SD350": {
        "description": "1250 - 1800 m³/h",
        "prices": [
            {"length": 14, "CS": 873000, "CST": 880000},
            {"length": 15, "CS": 878000, "CST": 885000},
            {"length": 16, "CS": 883000, "CST": 890000},
            {"length": 17, "CS": 899000, "CST": 906000},
            {"length": 18, "CS": 904000, "CST": 912000},
            {"length": 19, "CS": 909000, "CST": 917000},
            {"length": 20, "CS": 914000, "CST": 922000},
            {"length": 21, "CS": 919000, "CST": 927000},
            {"length": 22, "CS": 924000, "CST": 932000},
            {"length": 23, "CS": 929000, "CST": 938000},
            {"length": 24, "CS": 934000, "CST": 943000},
        ],
    },
}

# --- Services shared by both product families ---

# average = day rate x typical days + travel, as quoted to customers
STARTUP_LOCATIONS = {
    "Norway (Vard, Ulstein, etc.)": {"day_rate": 17050, "travel": 16280, "average": 50600},
    "Branch offices (Rotterdam, Singapore, Houston)": {"day_rate": 13750, "average": 41800},
    "Europe - General": {"average": 70000},
    "Germany": {"average": 70000},
    "Italy": {"average": 70000},
    "Netherlands": {"average": 70000},
    "Spain": {"average": 70000},
    "Balkan": {"average": 70000},
    "Turkey": {"average": 70000},
    "Europe - Min typical": {"average": 50000},
    "Korea (general)": {"day_rate": 12500, "average": 45000},
    "HHI": {"average": 45000},
    "HMD": {"average": 45000},
    "HHIC": {"average": 45000},
    "SHI": {"average": 45000},
    "DSME": {"average": 45000},
    "HHI Subic Philippines": {"day_rate": 14850, "travel": 19800, "average": 71500},
    "China - Shanghai area": {"day_rate": 9460, "average": 45000},
    "China - Guangzhou/Dalian etc.": {"day_rate": 11550, "travel": 10120, "average": 56000},
    "Japan": {"average": 56000},
}

# Flat shipping per delivery. Derived from the shipment cost tables:
# Europe = truck average, East-Europe = Constanta/Istanbul truck,
# Asia = 40HC seafreight, USA = Philadelphia 40HC.
SHIPPING_BY_REGION = {
    "Norway": 4500,
    "Europe": 45000,
    "Romania/Turkey/East-Europe": 70000,
    "Asia": 28000,
    "USA": 55000,
    "Canada": 60000,
}

# pump + price2 + price3 + system, per society and power bracket
CLASS_CERTIFICATION = {
    "DNV": {
        "<100kW": {"pump": 2500, "price2": 500, "price3": 0, "system": 0},
        ">100kW": {"pump": 3500, "price2": 5000, "price3": 0, "system": 0},
    },
    "KR": {
        "<100kW": {"pump": 5000, "price2": 4000, "price3": 500, "system": 4000},
        ">100kW": {"pump": 5000, "price2": 5000, "price3": 5000, "system": 0},
    },
    "NK": {
        "<100kW": {"pump": 0, "price2": 0, "price3": 0, "system": 0},
        ">100kW": {"pump": 2500, "price2": 3000, "price3": 0, "system": 0},
    },
    "CCS": {
        "<50kW": {"pump": 5500, "price2": 3000, "price3": 3000, "system": 1500},
        ">50kW": {"pump": 6000, "price2": 6000, "price3": 500, "system": 2500},
    },
    "ABS": {
        "<100kW": {"pump": 3500, "price2": 6400, "price3": 500, "system": 0},
        ">100kW": {"pump": 3500, "price2": 6400, "price3": 11000, "system": 5500},
    },
    "LR": {
        "<100kW": {"pump": 5000, "price2": 5000, "price3": 500, "system": 0},
        ">100kW": {"pump": 5000, "price2": 7000, "price3": 6500, "system": 6000},
    },
    "BV": {
        "<100kW": {"pump": 1500, "price2": 500, "price3": 0, "system": 0},
        ">100kW": {"pump": 11500, "price2": 4200, "price3": 0, "system": 0},
    },
    "RINA": {
        "<100kW": {"pump": 7000, "price2": 500, "price3": 0, "system": 0},
        ">100kW": {"pump": 7000, "price2": 2000, "price3": 0, "system": 0},
    },
}

PRICING_DATA = {
    "version": CATALOG_VERSION,
    "anti_heeling": ANTI_HEELING,
    "cargo_pumps": CARGO_PUMPS,
    "startup_locations": STARTUP_LOCATIONS,
    "shipping_by_region": SHIPPING_BY_REGION,
    "class_certification": CLASS_CERTIFICATION,
}
