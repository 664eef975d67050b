# report/report.py
from __future__ import annotations
import csv, os
from datetime import datetime
from typing import List, Dict, Optional
import matplotlib.pyplot as plt
import pandas as pd

from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader

from simulate import consolidar_por_cliente, totais_carteira

# chave da linha -> cabeçalho exibido
COLUNAS = [
    ("cliente", "Cliente"),
    ("valor_aporte", "Valor Aporte (R$)"),
    ("data_aporte", "Data Aporte"),
    ("data_vencimento", "Vencimento"),
    ("tipo", "Tipo"),
    ("modalidade", "Modalidade"),
    ("titulo", "Título"),
    ("taxa", "Taxa"),
    ("dias_corridos", "Dias Corridos"),
    ("dias_uteis", "Dias Úteis"),
    ("rendimento_bruto", "Rent. Bruta (R$)"),
    ("aliquota_ir", "Alíquota IR (%)"),
    ("valor_ir", "IR (R$)"),
    ("valor_iof", "IOF (R$)"),
    ("rendimento_liquido", "Rent. Líquida (R$)"),
    ("patrimonio_liquido", "Patrimônio Líquido (R$)"),
]


def _brl(x: float) -> str:
    return "R$ " + f"{x:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def pct_ou_traco(v: Optional[float]) -> str:
    """Percentual com duas casas; "-" quando o indexador não está disponível."""
    return "-" if v is None else f"{v:.2f}%"


def df_investimentos(linhas: List[Dict]) -> pd.DataFrame:
    df = pd.DataFrame(linhas, columns=[k for k, _ in COLUNAS])
    return df.rename(columns=dict(COLUNAS))


def df_clientes(linhas: List[Dict]) -> pd.DataFrame:
    rows = [{"Cliente": c["cliente"], "Investimentos": c["investimentos"],
             "Valor Aplicado (R$)": c["valor_aplicado"], "Patrimônio Projetado (R$)": c["patrimonio_projetado"]}
            for c in consolidar_por_cliente(linhas).values()]
    return pd.DataFrame(rows, columns=["Cliente", "Investimentos", "Valor Aplicado (R$)", "Patrimônio Projetado (R$)"])


def salvar_csv(csv_path: str, linhas: List[Dict]) -> None:
    header = [titulo for _, titulo in COLUNAS]
    rows = []
    for l in linhas:
        row = []
        for k, _ in COLUNAS:
            v = l.get(k, "")
            row.append(f"{v:.2f}".replace(".", ",") if isinstance(v, float) else v)
        rows.append(row)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, delimiter=";")
        w.writerow(header); w.writerows(rows)


def grafico_png(png_path: str, linhas: List[Dict]) -> None:
    nomes = [f"{l['cliente'] or '-'}\n{l['taxa']}" for l in linhas]
    x = range(len(linhas))
    plt.figure(figsize=(max(6, len(linhas) * 1.2), 4.5))
    plt.bar([i - 0.2 for i in x], [l["rendimento_bruto"] for l in linhas], width=0.4, label="Bruto")
    plt.bar([i + 0.2 for i in x], [l["rendimento_liquido"] for l in linhas], width=0.4, label="Líquido")
    plt.xticks(list(x), nomes, fontsize=8)
    plt.title("Rentabilidade no vencimento – bruta x líquida (IR + IOF)")
    plt.ylabel("Rendimento (R$)")
    plt.legend(); plt.tight_layout(); plt.savefig(png_path, dpi=150); plt.close()


def html_relatorio(html_path: str, linhas: List[Dict], png_path: str, csv_path: str) -> None:
    tot = totais_carteira(linhas)
    tabela = df_investimentos(linhas).to_html(index=False, float_format=lambda v: f"{v:,.2f}", border=0)
    clientes = df_clientes(linhas).to_html(index=False, float_format=lambda v: f"{v:,.2f}", border=0)
    html = f"""<!doctype html>
<html lang="pt-br"><head><meta charset="utf-8">
<title>Relatório – Rentabilidade de Renda Fixa</title>
<style>
body{{font-family:Arial,Helvetica,sans-serif;margin:2rem}}
h1,h2{{margin:.3rem 0}} small{{color:#555}}
table{{border-collapse:collapse;width:100%;margin:1rem 0;font-size:.85rem}}
th,td{{border:1px solid #ddd;padding:6px;text-align:right}}
th{{background:#f2f2f2}} td:first-child,th:first-child{{text-align:left}}
blockquote{{background:#fafafa;border-left:4px solid #ccc;padding:.5rem 1rem}}
</style></head><body>
<h1>Relatório – Rentabilidade de Renda Fixa</h1>
<small>Gerado em {datetime.now().strftime("%d/%m/%Y %H:%M:%S")}</small>

<h2>Totais</h2>
<table>
<tr><th>Investimentos</th><td>{len(linhas)}</td></tr>
<tr><th>Total aportado</th><td>{_brl(tot['valor_aporte'])}</td></tr>
<tr><th>Rendimento bruto</th><td>{_brl(tot['rendimento_bruto'])}</td></tr>
<tr><th>IR</th><td>{_brl(tot['valor_ir'])}</td></tr>
<tr><th>IOF</th><td>{_brl(tot['valor_iof'])}</td></tr>
<tr><th>Rendimento líquido</th><td><b>{_brl(tot['rendimento_liquido'])}</b></td></tr>
<tr><th>Patrimônio líquido</th><td><b>{_brl(tot['patrimonio_liquido'])}</b></td></tr>
</table>

<h2>Por cliente</h2>
{clientes}

<h2>Investimentos</h2>
{tabela}

<h2>Gráfico</h2>
<img src="{os.path.basename(png_path)}" alt="Gráfico" style="max-width:100%;height:auto"/>

<h2>CSV</h2>
<p><a href="{os.path.basename(csv_path)}">{os.path.basename(csv_path)}</a></p>

<blockquote><b>Notas:</b><br>
1) Rentabilidade composta em dias úteis (base 252) do aporte ao vencimento.<br>
2) IOF regressivo nos primeiros 29 dias; IR regressivo (22,5% a 15%) sobre o rendimento líquido de IOF.<br>
3) Linhas com dados inválidos aparecem zeradas.</blockquote>
</body></html>"""
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(html)


def pdf_relatorio(pdf_path: str, linhas: List[Dict], png_path: str) -> None:
    """
    Gera PDF (paisagem) com totais, tabela resumida e o gráfico.
    """
    c = canvas.Canvas(pdf_path, pagesize=landscape(A4))
    w, h = landscape(A4)
    x, y = 2*cm, h - 2*cm
    tot = totais_carteira(linhas)

    def draw_line(txt: str, dy=0.6*cm, bold=False):
        nonlocal y
        y -= dy
        if bold:
            c.setFont("Helvetica-Bold", 11)
        else:
            c.setFont("Helvetica", 10)
        c.drawString(x, y, txt)

    c.setFont("Helvetica-Bold", 14)
    c.drawString(x, y, "Relatório – Rentabilidade de Renda Fixa")
    c.setFont("Helvetica", 9)
    c.drawRightString(w-2*cm, y, datetime.now().strftime("%d/%m/%Y %H:%M:%S"))

    draw_line(f"Investimentos: {len(linhas)} | Total aportado: {_brl(tot['valor_aporte'])}", dy=1.0*cm)
    draw_line(f"Rend. bruto: {_brl(tot['rendimento_bruto'])} | IR: {_brl(tot['valor_ir'])} | "
              f"IOF: {_brl(tot['valor_iof'])} | Rend. líquido: {_brl(tot['rendimento_liquido'])}")

    draw_line("Por cliente:", dy=0.8*cm, bold=True)
    for cli in consolidar_por_cliente(linhas).values():
        draw_line(f"{cli['cliente'][:40]}: {cli['investimentos']} invest. | Aplicado: {_brl(cli['valor_aplicado'])} | "
                  f"Patrimônio projetado: {_brl(cli['patrimonio_projetado'])}", dy=0.5*cm)
        if y < 3*cm:
            c.showPage()
            y = h - 2*cm

    draw_line("Investimentos:", dy=0.8*cm, bold=True)
    cols = [("Cliente", 0), ("Taxa", 6*cm), ("Aporte", 13*cm), ("Dias", 15*cm),
            ("Bruto", 18.5*cm), ("IR", 21*cm), ("IOF", 23*cm), ("Líquido", w-4*cm)]

    def header():
        nonlocal y
        y -= 0.5*cm
        c.setFont("Helvetica-Bold", 9)
        for nome, dx in cols:
            (c.drawString if dx < 6.5*cm else c.drawRightString)(x+dx, y, nome)
        c.setFont("Helvetica", 9)

    header()
    for l in sorted(linhas, key=lambda k: k["rendimento_liquido"], reverse=True):
        y -= 0.5*cm
        if y < 2*cm:
            c.showPage()
            y = h - 2*cm
            header()
            y -= 0.5*cm
        c.drawString(x, y, (l["cliente"] or "-")[:32])
        c.drawString(x+6*cm, y, l["taxa"])
        c.drawRightString(x+13*cm, y, _brl(l["valor_aporte"]))
        c.drawRightString(x+15*cm, y, str(l["dias_corridos"]))
        c.drawRightString(x+18.5*cm, y, _brl(l["rendimento_bruto"]))
        c.drawRightString(x+21*cm, y, _brl(l["valor_ir"]))
        c.drawRightString(x+23*cm, y, _brl(l["valor_iof"]))
        c.drawRightString(x+w-4*cm, y, _brl(l["rendimento_liquido"]))

    if os.path.exists(png_path):
        c.showPage()
        c.setFont("Helvetica-Bold", 12)
        c.drawString(2*cm, h - 2*cm, "Gráfico – Rentabilidade bruta x líquida")
        img = ImageReader(png_path)
        c.drawImage(img, 2*cm, h - 2*cm - 15*cm, width=w - 4*cm, height=14*cm, preserveAspectRatio=True, anchor='n')

    c.save()
