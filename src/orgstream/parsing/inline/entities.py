"""Named entity table.

Maps ``\\name`` to its HTML and UTF-8 renditions. A subset of Org's
``org-entities`` covering Greek letters, arrows, typographic punctuation
and common symbols.
"""

ENTITIES: dict[str, tuple[str, str]] = {
    # Greek
    "alpha": ("&alpha;", "α"),
    "beta": ("&beta;", "β"),
    "gamma": ("&gamma;", "γ"),
    "delta": ("&delta;", "δ"),
    "epsilon": ("&epsilon;", "ε"),
    "zeta": ("&zeta;", "ζ"),
    "eta": ("&eta;", "η"),
    "theta": ("&theta;", "θ"),
    "iota": ("&iota;", "ι"),
    "kappa": ("&kappa;", "κ"),
    "lambda": ("&lambda;", "λ"),
    "mu": ("&mu;", "μ"),
    "nu": ("&nu;", "ν"),
    "xi": ("&xi;", "ξ"),
    "pi": ("&pi;", "π"),
    "rho": ("&rho;", "ρ"),
    "sigma": ("&sigma;", "σ"),
    "tau": ("&tau;", "τ"),
    "upsilon": ("&upsilon;", "υ"),
    "phi": ("&phi;", "φ"),
    "chi": ("&chi;", "χ"),
    "psi": ("&psi;", "ψ"),
    "omega": ("&omega;", "ω"),
    "Gamma": ("&Gamma;", "Γ"),
    "Delta": ("&Delta;", "Δ"),
    "Theta": ("&Theta;", "Θ"),
    "Lambda": ("&Lambda;", "Λ"),
    "Pi": ("&Pi;", "Π"),
    "Sigma": ("&Sigma;", "Σ"),
    "Phi": ("&Phi;", "Φ"),
    "Psi": ("&Psi;", "Ψ"),
    "Omega": ("&Omega;", "Ω"),
    # Arrows
    "to": ("&rarr;", "→"),
    "rarr": ("&rarr;", "→"),
    "larr": ("&larr;", "←"),
    "uarr": ("&uarr;", "↑"),
    "darr": ("&darr;", "↓"),
    "harr": ("&harr;", "↔"),
    "rArr": ("&rArr;", "⇒"),
    "lArr": ("&lArr;", "⇐"),
    "hArr": ("&hArr;", "⇔"),
    # Punctuation
    "nbsp": ("&nbsp;", " "),
    "ndash": ("&ndash;", "–"),
    "mdash": ("&mdash;", "—"),
    "hellip": ("&hellip;", "…"),
    "dots": ("&hellip;", "…"),
    "laquo": ("&laquo;", "«"),
    "raquo": ("&raquo;", "»"),
    "ldquo": ("&ldquo;", "“"),
    "rdquo": ("&rdquo;", "”"),
    "lsquo": ("&lsquo;", "‘"),
    "rsquo": ("&rsquo;", "’"),
    "bull": ("&bull;", "•"),
    "middot": ("&middot;", "·"),
    "dagger": ("&dagger;", "†"),
    "Dagger": ("&Dagger;", "‡"),
    "sect": ("&sect;", "§"),
    "para": ("&para;", "¶"),
    # Symbols
    "copy": ("&copy;", "©"),
    "reg": ("&reg;", "®"),
    "trade": ("&trade;", "™"),
    "deg": ("&deg;", "°"),
    "plusmn": ("&plusmn;", "±"),
    "times": ("&times;", "×"),
    "div": ("&divide;", "÷"),
    "le": ("&le;", "≤"),
    "ge": ("&ge;", "≥"),
    "ne": ("&ne;", "≠"),
    "infin": ("&infin;", "∞"),
    "micro": ("&micro;", "µ"),
    "euro": ("&euro;", "€"),
    "pound": ("&pound;", "£"),
    "yen": ("&yen;", "¥"),
    "cent": ("&cent;", "¢"),
    "frac12": ("&frac12;", "½"),
    "frac14": ("&frac14;", "¼"),
    "frac34": ("&frac34;", "¾"),
    "sup2": ("&sup2;", "²"),
    "sup3": ("&sup3;", "³"),
    "check": ("&#x2713;", "✓"),
}
