"""
CANDIDATE UNIVERSES

Fixed instrument lists the selectors draw from. This file specifies WHAT
instruments are eligible, not how they are ranked or weighted.

Rules:
- Read-only strategy definition
- No data fetching
- Deterministic and version-stable
"""

from dataclasses import dataclass
from typing import Dict, List

# -------------------------------------------------------------------
# Full equity universe (S&P 500 constituents)
# -------------------------------------------------------------------

SP500_ALL_SYMBOLS: List[str] = [
    "SNDK", "WDC", "WBD", "MU", "ALB", "TER", "APP", "STX", "FIX", "LRCX",
    "GOOGL", "GOOG", "NEM", "GLW", "INTC", "CHRW", "EXPE", "IVZ", "FSLR", "AMD",
    "GM", "CMI", "TPR", "CAT", "REGN", "INCY", "TSLA", "DAL", "AMAT", "APH",
    "UAL", "HII", "LLY", "IQV", "LVS", "KLAC", "TMO", "BIIB", "VTRS", "PLTR",
    "C", "TEL", "DD", "ANET", "ROST", "CRH", "JNJ", "AES", "AVGO", "HAL",
    "FOXA", "AAPL", "RL", "GEV", "CRL", "EA", "STLD", "JBHT", "MRK", "ULTA",
    "RTX", "BK", "APA", "CFG", "FOX", "EXPD", "CAH", "MS", "IDXX", "CVNA",
    "PH", "GE", "GS", "HOOD", "KEYS", "WST", "VTR", "EL", "WELL", "DAY",
    "FDX", "LUV", "TJX", "AIZ", "MPWR", "NVDA", "DLTR", "SYF", "NUE", "MNST",
    "HCA", "ABBV", "STT", "PLD", "TKO", "WYNN", "LHX", "HPE", "HWM", "UHS",
    "BKR", "VLO", "SRE", "MTD", "KEY", "NOC", "EME", "F", "PWR", "CVS",
    "CEG", "DG", "ROK", "COR", "EBAY", "HOLX", "EPAM", "AXP", "GD", "JCI",
    "L", "USB", "CBRE", "WFC", "BAC", "PCG", "MCK", "WMT", "FCX", "EIX",
    "BMY", "DHR", "LDOS", "IBKR", "COO", "ADI", "TECH", "SPG", "AME", "COF",
    "AMGN", "ETR", "A", "CSCO", "GL", "MAR", "FE", "MLM", "RF", "PCAR",
    "HST", "AEP", "EW", "TFC", "JPM", "DVN", "NEE", "CNC", "BG", "NSC",
    "GILD", "AKAM", "ATO", "FITB", "CINF", "XOM", "SCHW", "BDX", "NDSN", "HIG",
    "PFG", "NDAQ", "TRV", "OMC", "SNA", "CSX", "CB", "GEHC", "MDT", "XEL",
    "ALLE", "VMC", "HUBB", "TXT", "PNC", "WTW", "SLB", "DHI", "QCOM", "HAS",
    "FRT", "HLT", "TTWO", "CCL", "ROL", "PHM", "TRGP", "NCLH", "NTRS", "PEP",
    "WAT", "FANG", "LNT", "ISRG", "APTV", "CNP", "SWK", "WSM", "LOW", "ACGL",
    "JBL", "AMZN", "NI", "STE", "ES", "EVRG", "ADM", "AFL", "CTRA", "DOV",
    "URI", "ALL", "AEE", "MMM", "LMT", "XYL", "HSY", "DELL", "CVX", "FTV",
    "PSX", "PPL", "RJF", "DDOG", "CTSH", "TROW", "PRU", "HUM", "BA", "UNH",
    "APO", "MCD", "TRMB", "SOLV", "NRG", "WMB", "MRNA", "TSN", "MCO", "IBM",
    "D", "HSIC", "CDNS", "PKG", "MA", "BLK", "WAB", "ORLY", "WEC", "BX",
    "MTB", "YUM", "EXC", "VRTX", "PTC", "JKHY", "HBAN", "NTAP", "COP", "ABNB",
    "TDY", "AIG", "CMS", "J", "AVY", "EG", "AON", "PNR", "MSCI", "MTCH",
    "CME", "DUK", "BXP", "DECK", "PFE", "SPGI", "ON", "ED", "V", "MGM",
    "AOS", "MSFT", "IEX", "MO", "EXE", "BEN", "GPC", "O", "PNW", "UNP",
    "DTE", "EMR", "CRM", "CPT", "KO", "REG", "MET", "VLTO", "PEG", "WRB",
    "KMI", "RVTY", "DGX", "NXPI", "ITW", "WM", "KKR", "EQIX", "ECL", "GWW",
    "GRMN", "EQT", "LH", "ADSK", "XYZ", "ZBH", "CRWD", "ELV", "SJM", "DASH",
    "SYY", "UPS", "LYV", "SO", "KIM", "NVR", "PODD", "MPC", "OXY", "TAP",
    "GPN", "RMD", "EQR", "MAS", "BKNG", "FAST", "BBY", "PANW", "TGT", "MAA",
    "ODFL", "VZ", "IR", "ARES", "ABT", "FICO", "GNRC", "TSCO", "META", "DIS",
    "ESS", "HD", "BR", "AWK", "AZO", "DPZ", "DE", "SHW", "GEN", "BALL",
    "BSX", "ADBE", "KHC", "PM", "AMP", "SNPS", "DLR", "DOC", "MSI", "WDAY",
    "TT", "UDR", "WY", "ETN", "OKE", "LIN", "AVB", "ORCL", "ICE", "MCHP",
    "SYK", "IFF", "PG", "UBER", "CTVA", "CPAY", "LEN", "ACN", "SBUX", "MKC",
    "RCL", "TDG", "KR", "NWSA", "CPB", "COST", "PSA", "RSG", "VST", "GIS",
    "PPG", "OTIS", "HPQ", "NKE", "EXR", "FFIV", "PGR", "APD", "NWS", "T",
    "CL", "AMCR", "CCI", "CHD", "MMC", "INTU", "VICI", "EOG", "INVH", "VRSN",
    "TMUS", "LULU", "CTAS", "SW", "DRI", "ADP", "CI", "KDP", "CMCSA", "IRM",
    "DOW", "CF", "EFX", "TXN", "CSGP", "CAG", "KVUE", "SWKS", "HON", "AJG",
    "ERIE", "SBAC", "CLX", "LII", "BLDR", "FIS", "STZ", "TPL", "ALGN", "LW",
    "DXCM", "IP", "CPRT", "AMT", "ZTS", "MDLZ", "FTNT", "DVA", "ROP", "PYPL",
    "HRL", "TYL", "ZBRA", "KMB", "NOW", "PAYX", "CDW", "POOL", "BRO", "AXON",
    "NFLX", "VRSK", "CARR", "GDDY", "LYB", "PAYC", "COIN", "ARE", "MOS", "MOH",
    "FDS", "CMG", "IT", "SMCI", "BAX", "TTD", "CHTR",
]

# Static universe replayed by the backtest simulator
BACKTEST_UNIVERSE: List[str] = SP500_ALL_SYMBOLS[:100]

# -------------------------------------------------------------------
# Defensive ETF universe
# -------------------------------------------------------------------


@dataclass(frozen=True)
class DefensiveInstrument:
    symbol: str
    name: str
    category: str


DEFENSIVE_ETFS: List[DefensiveInstrument] = [
    DefensiveInstrument("GLD", "SPDR Gold Shares", "Gold"),
    DefensiveInstrument("EEM", "iShares MSCI Emerging Markets", "Emerging markets equity"),
    DefensiveInstrument("IWM", "iShares Russell 2000", "Small-cap equity"),
    DefensiveInstrument("EFA", "iShares MSCI EAFE", "Developed markets equity"),
    DefensiveInstrument("QQQ", "Invesco QQQ Trust", "NASDAQ 100"),
    DefensiveInstrument("SPY", "SPDR S&P 500 ETF", "S&P 500"),
    DefensiveInstrument("DBC", "Invesco DB Commodity", "Commodities"),
    DefensiveInstrument("IEF", "iShares 7-10 Year Treasury", "Intermediate Treasuries"),
    DefensiveInstrument("LQD", "iShares Investment Grade Corporate", "Investment-grade corporates"),
    DefensiveInstrument("AGG", "iShares Core US Aggregate Bond", "Aggregate bonds"),
    DefensiveInstrument("TLT", "iShares 20+ Year Treasury", "Long Treasuries"),
    DefensiveInstrument("TIP", "iShares TIPS Bond", "Inflation-protected bonds"),
    DefensiveInstrument("SHY", "iShares 1-3 Year Treasury", "Short Treasuries"),
    DefensiveInstrument("IYR", "iShares US Real Estate", "Real estate"),
]

# -------------------------------------------------------------------
# Regime indicator symbols
# -------------------------------------------------------------------

SIGNAL_SYMBOLS: Dict[str, str] = {
    "VIX": "^VIX",      # Volatility index
    "TNX": "^TNX",      # 10-year Treasury yield
    "IRX": "^IRX",      # 13-week Treasury bill
    "HYG": "HYG",       # High-yield corporate bond ETF
    "LQD": "LQD",       # Investment-grade corporate bond ETF
}
