"""
Flask web application for the mortgage repayment calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.
"""

from __future__ import annotations

from flask import Flask, abort, render_template_string, request

import config as cfg
from cli import compute_display_data, fmt, pct, years_label
from session import FormSession
from validation import parse_form
import report

app = Flask(__name__)


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Mortgage Repayment Calculator</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap" rel="stylesheet">
<style>
  *{margin:0;padding:0;box-sizing:border-box}

  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(99,102,241,0.1);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --text-muted:#64748b;
    --indigo:#818cf8;
    --indigo-deep:#6366f1;
    --violet:#8b5cf6;
    --emerald:#34d399;
    --amber:#fbbf24;
    --red:#f87171;
    --radius-lg:16px;
    --radius-md:10px;
  }

  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:'Inter',system-ui,-apple-system,sans-serif;
    line-height:1.6;min-height:100vh;
  }

  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}

  .hero{text-align:center;padding:1.5rem 0 2rem}
  .hero h1{
    font-size:clamp(1.5rem,4vw,2.4rem);font-weight:800;letter-spacing:-.035em;
    background:linear-gradient(135deg,#e2e8f0 0%,#818cf8 45%,#34d399 100%);
    -webkit-background-clip:text;-webkit-text-fill-color:transparent;background-clip:text;
  }
  .hero-sub{color:var(--text-secondary);margin-top:.5rem;font-size:.92rem}

  .layout{display:grid;grid-template-columns:1fr 1fr;gap:1.4rem;align-items:start}
  @media(max-width:860px){.layout{grid-template-columns:1fr}}

  .card{
    background:var(--bg-surface);backdrop-filter:blur(24px);
    border:1px solid var(--border-subtle);border-radius:var(--radius-lg);
    padding:1.8rem;margin-bottom:1.4rem;
  }
  .sh{display:flex;align-items:center;justify-content:space-between;margin-bottom:1.2rem}
  h2{font-size:1.1rem;font-weight:700;letter-spacing:-.015em}

  /* ── form ── */
  .form-group{display:flex;flex-direction:column;margin-bottom:1rem}
  .form-group label{font-size:.78rem;color:var(--text-secondary);margin-bottom:.3rem;font-weight:500}
  .form-row{display:grid;grid-template-columns:1fr 1fr;gap:0 1rem}
  .input-wrap{
    display:flex;align-items:stretch;background:var(--bg-input);
    border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);overflow:hidden;
  }
  .input-wrap:focus-within{border-color:var(--indigo-deep);box-shadow:0 0 0 3px rgba(99,102,241,.12)}
  .input-wrap.has-error{border-color:var(--red)}
  .input-wrap input{
    flex:1;background:transparent;border:none;color:var(--text-primary);
    padding:.6rem .85rem;font-size:.95rem;font-family:inherit;outline:none;min-width:0;
  }
  .affix{display:flex;align-items:center;padding:0 .8rem;background:rgba(99,102,241,.08);color:var(--indigo);font-weight:600;font-size:.85rem}
  .field-error{color:var(--red);font-size:.78rem;margin-top:.3rem}
  .radio{
    display:flex;align-items:center;gap:.6rem;padding:.6rem .85rem;margin-bottom:.5rem;
    border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);cursor:pointer;
  }
  .radio:has(input:checked){border-color:var(--amber);background:rgba(251,191,36,.06)}

  /* ── buttons ── */
  .btn{
    display:inline-flex;align-items:center;justify-content:center;gap:.5rem;
    padding:.75rem 2rem;border:none;border-radius:var(--radius-md);
    font-size:.95rem;font-weight:600;cursor:pointer;font-family:inherit;
  }
  .btn:disabled{opacity:.4;cursor:not-allowed}
  .btn-primary{
    width:100%;margin-top:.6rem;
    background:linear-gradient(135deg,var(--indigo-deep),var(--violet));
    color:#fff;box-shadow:0 4px 20px rgba(99,102,241,.3);
  }
  .btn-link{background:none;color:var(--text-secondary);text-decoration:underline;padding:0;font-size:.85rem}

  /* ── results ── */
  .result-box{
    background:rgba(15,23,42,.35);border:1px solid rgba(51,65,85,.25);
    border-radius:var(--radius-md);padding:1rem 1.2rem;margin-bottom:.8rem;
  }
  .result-head{display:flex;justify-content:space-between;font-size:.85rem;color:var(--text-secondary)}
  .result-value{font-size:1.9rem;font-weight:800;font-variant-numeric:tabular-nums}
  .v-emerald{color:var(--emerald)}
  .v-amber{color:var(--amber)}
  .stat-row{display:flex;justify-content:space-between;padding:.45rem 0;border-bottom:1px solid rgba(51,65,85,.3)}
  .stat-row:last-child{border-bottom:none}
  .stat-label{color:var(--text-secondary);font-size:.86rem}
  .stat-value{font-weight:600;font-size:.86rem;font-variant-numeric:tabular-nums}
  .empty{text-align:center;padding:3rem 1rem;color:var(--text-secondary)}
  .empty h2{margin-bottom:.6rem}

  .table-wrap{overflow-x:auto;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.25)}
  .be-table{width:100%;border-collapse:collapse;font-size:.84rem}
  .be-table th{
    text-align:left;padding:.6rem .8rem;background:rgba(15,23,42,.45);color:var(--text-secondary);
    font-size:.74rem;text-transform:uppercase;letter-spacing:.05em;
  }
  .be-table td{padding:.45rem .8rem;border-bottom:1px solid rgba(51,65,85,.15)}
  .be-table .base-row td{background:rgba(16,185,129,.07);font-weight:600}

  .chart-img{width:100%;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.15)}
  .chart-desc{color:var(--text-muted);font-size:.82rem;margin-bottom:.8rem}

  /* ── loading overlay ── */
  #loading{
    display:none;position:fixed;inset:0;background:rgba(5,8,22,.88);z-index:999;
    justify-content:center;align-items:center;flex-direction:column;gap:1rem;
  }
  .loader{width:48px;height:48px;border-radius:50%;border:3px solid transparent;border-top-color:var(--indigo);animation:spin 1s linear infinite}
  @keyframes spin{to{transform:rotate(360deg)}}

  .footer{text-align:center;padding:1rem 0 2rem;color:var(--text-muted);font-size:.78rem}
</style>
</head>
<body>

<div id="loading">
  <div class="loader"></div>
  <p>Calculating...</p>
</div>

<div class="container">

<header class="hero">
  <h1>Mortgage Repayment Calculator</h1>
  <p class="hero-sub">See what your monthly repayment and total cost would be.</p>
</header>

<div class="layout">

<!-- Input Form -->
<div class="card">
  <form method="POST" id="calc-form" novalidate>
    <div class="sh">
      <h2>Mortgage Calculator</h2>
      <button type="submit" name="action" value="reset" class="btn btn-link" id="reset-btn">Clear All</button>
    </div>

    <div class="form-group">
      <label for="amount">Mortgage Amount</label>
      <div class="input-wrap {{ 'has-error' if errors.amount }}">
        <span class="affix">{{ currency }}</span>
        <input type="text" inputmode="decimal" id="amount" name="amount" value="{{ form.amount }}"
               aria-invalid="{{ 'true' if errors.amount else 'false' }}">
      </div>
      {% if errors.amount %}<p class="field-error" id="amount-error" role="alert">{{ errors.amount }}</p>{% endif %}
    </div>

    <div class="form-row">
      <div class="form-group">
        <label for="term">Mortgage Term</label>
        <div class="input-wrap {{ 'has-error' if errors.term }}">
          <input type="text" inputmode="decimal" id="term" name="term" value="{{ form.term }}"
                 aria-invalid="{{ 'true' if errors.term else 'false' }}">
          <span class="affix">years</span>
        </div>
        {% if errors.term %}<p class="field-error" id="term-error" role="alert">{{ errors.term }}</p>{% endif %}
      </div>
      <div class="form-group">
        <label for="rate">Interest Rate</label>
        <div class="input-wrap {{ 'has-error' if errors.rate }}">
          <input type="text" inputmode="decimal" id="rate" name="rate" value="{{ form.rate }}"
                 aria-invalid="{{ 'true' if errors.rate else 'false' }}">
          <span class="affix">%</span>
        </div>
        {% if errors.rate %}<p class="field-error" id="rate-error" role="alert">{{ errors.rate }}</p>{% endif %}
      </div>
    </div>

    <div class="form-group">
      <label>Mortgage Type</label>
      {% for value, label in type_options %}
      <label class="radio">
        <input type="radio" name="mortgage_type" value="{{ value }}" {{ 'checked' if form.mortgage_type == value }}>
        {{ label }}
      </label>
      {% endfor %}
      {% if errors.mortgage_type %}<p class="field-error" role="alert">{{ errors.mortgage_type }}</p>{% endif %}
    </div>

    <button type="submit" name="action" value="calculate" class="btn btn-primary" id="submit-btn">
      Calculate Repayments
    </button>
  </form>
</div>

<!-- Results -->
<div class="card">
{% if d %}
  <div class="sh"><h2>Your Results</h2></div>

  <div class="result-box">
    <div class="result-head"><span>Monthly Payment</span><span>{{ d.payment_label }}</span></div>
    <div class="result-value v-emerald" id="monthly-payment">{{ fmt(d.monthly_payment) }}</div>
  </div>
  <div class="result-box">
    <div class="result-head"><span>Total Interest</span></div>
    <div class="result-value v-amber" id="total-interest">{{ fmt(d.total_interest) }}</div>
  </div>
  <div class="result-box">
    <div class="result-head"><span>Total Amount</span><span>(Principal + Interest)</span></div>
    <div class="result-value" id="total-amount">{{ fmt(d.total_amount) }}</div>
  </div>

  <h2 style="margin:1.2rem 0 .4rem;font-size:.95rem">Summary</h2>
  <div class="stat-row"><span class="stat-label">Principal</span><span class="stat-value">{{ fmt(d.principal) }}</span></div>
  <div class="stat-row"><span class="stat-label">Interest Rate</span><span class="stat-value">{{ pct(d.annual_rate) }} per year</span></div>
  <div class="stat-row"><span class="stat-label">Term</span><span class="stat-value">{{ years_label(d.years) }}</span></div>
  <div class="stat-row"><span class="stat-label">Type</span><span class="stat-value">{{ d.type_label }}</span></div>
{% else %}
  <div class="empty">
    <h2>Results shown here</h2>
    <p>Complete the form and click 'Calculate Repayments' to see what your monthly repayment would be.</p>
  </div>
{% endif %}
</div>

</div>

{% if d %}
<!-- Repayment vs interest only -->
<div class="card">
  <div class="sh"><h2>Repayment vs Interest Only</h2></div>
  <div class="table-wrap">
    <table class="be-table">
      <thead><tr><th></th><th>Repayment</th><th>Interest only</th></tr></thead>
      <tbody>
        <tr><td>Monthly payment</td><td>{{ fmt(d.cmp_repayment_monthly) }}</td><td>{{ fmt(d.cmp_interest_only_monthly) }}</td></tr>
        <tr><td>Total interest</td><td>{{ fmt(d.cmp_repayment_interest) }}</td><td>{{ fmt(d.cmp_interest_only_interest) }}</td></tr>
      </tbody>
    </table>
  </div>
  <p class="chart-desc" style="margin-top:.8rem">
    Repayment costs {{ fmt(d.cmp_monthly_difference) }}/mo more but saves {{ fmt(d.cmp_interest_difference) }}
    in interest, and the principal is cleared by the end of the term.
  </p>
  {% if charts|length > 0 and charts[0] %}
  <img class="chart-img" src="data:image/png;base64,{{ charts[0] }}" alt="Cost Breakdown">
  {% endif %}
</div>

<!-- Rate sensitivity -->
<div class="card">
  <div class="sh"><h2>If the Rate Were Different</h2></div>
  <p class="chart-desc">Monthly payment and total interest for rates around {{ pct(d.annual_rate) }}, same amount and term.</p>
  <div class="table-wrap" style="margin-bottom:1rem">
    <table class="be-table">
      <thead><tr><th>Rate</th><th>Monthly</th><th>Total interest</th></tr></thead>
      <tbody>
      {% for rate, monthly, interest, is_base in d.sensitivity_rows %}
        <tr class="{{ 'base-row' if is_base }}"><td>{{ pct(rate) }}</td><td>{{ fmt(monthly) }}</td><td>{{ fmt(interest) }}</td></tr>
      {% endfor %}
      </tbody>
    </table>
  </div>
  {% if charts|length > 1 and charts[1] %}
  <img class="chart-img" src="data:image/png;base64,{{ charts[1] }}" alt="Rate Sensitivity">
  {% endif %}
</div>
{% endif %}

<div class="footer">For illustration only. Not financial advice.</div>
</div>

<script>
(function(){
  var form=document.getElementById('calc-form');
  var submitBtn=document.getElementById('submit-btn');
  var busy=false;
  form.addEventListener('submit',function(e){
    var action=e.submitter?e.submitter.value:'calculate';
    if(action!=='calculate') return;
    if(busy){e.preventDefault();return;}
    busy=true;
    document.getElementById('loading').style.display='flex';
    submitBtn.disabled=true;
  });

  /* Editing a field clears only that field's error */
  ['amount','term','rate'].forEach(function(name){
    var input=document.getElementById(name);
    input.addEventListener('input',function(){
      var err=document.getElementById(name+'-error');
      if(err) err.remove();
      input.parentElement.classList.remove('has-error');
      input.setAttribute('aria-invalid','false');
    });
  });
})();
</script>
</body>
</html>
"""


# ═══════════════════════════════════════════════════════════════════
# Rendering
# ═══════════════════════════════════════════════════════════════════

def _render(session: FormSession, d=None, charts=None) -> str:
    return render_template_string(
        HTML_TEMPLATE,
        form=session.form,
        errors=session.errors,
        d=d,
        charts=charts or [],
        currency=cfg.CURRENCY_SYMBOL,
        type_options=list(cfg.MORTGAGE_TYPE_LABELS.items()),
        fmt=fmt,
        pct=pct,
        years_label=years_label,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render(FormSession())

    action = request.form.get("action", "calculate")
    if action == "reset":
        return _render(FormSession())
    if action != "calculate":
        abort(400, description=f"Unknown action: {action}")

    session = FormSession(form=parse_form(request.form))
    result = session.submit()
    if result is None:
        app.logger.info("Rejected submission: %s", session.errors)
        return _render(session)

    app.logger.info(
        "Calculated %s mortgage: principal=%s rate=%s years=%s monthly=%.2f",
        result.mortgage_type, result.principal, result.annual_rate,
        result.years, result.monthly_payment,
    )
    d = compute_display_data(result)
    chart_images = report.get_web_charts(d)
    return _render(session, d=d, charts=chart_images)


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(
    host: str = cfg.WEB_HOST,
    port: int = cfg.WEB_PORT,
    debug: bool = True,
    open_browser: bool = True,
) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{host}:{port}"
    print(f"Starting web app at {url}")
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_web()
