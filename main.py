# main.py
from __future__ import annotations
import logging
import os
from datetime import date, datetime

from config import settings
from services.bcb_api import fetch_indices
from services.registros import carregar_csv, validar_dados_investimento
from finance.datas import feriados_periodo, parse_data
from finance.modelos import InvestimentoInput, Modalidade
from finance.products import descricao_taxa, resolver_taxa_anual
from finance.rentabilidade import calcular_rentabilidade
from finance.tvm import aa_to_ad
from simulate import calcular_carteira, totais_carteira
from report.report import salvar_csv, grafico_png, html_relatorio, pdf_relatorio


# =========================
# Helpers de entrada
# =========================
def _input_float(msg: str, default: float) -> float:
    raw = input(f"{msg} [{default}]: ").strip()
    return float(raw.replace(",", ".") or default)

def _input_str(msg: str, default: str) -> str:
    raw = input(f"{msg} [{default}]: ").strip()
    return raw or default

def _input_bool(msg: str, default: bool=False) -> bool:
    raw = input(f"{msg} [{'s' if default else 'n'}]: ").strip().lower()
    if raw == "":
        return default
    return raw.startswith("s")


# =========================
# Menu
# =========================
def menu():
    print("\n=== Rentabilidade de Renda Fixa (IR regressivo + IOF + dias úteis) ===")
    print("1) Calcular um investimento")
    print("2) Relatório da carteira a partir de CSV (HTML + CSV + PNG + PDF)")
    print("3) Consultar Selic e IPCA (SGS/BCB)")
    print("0) Sair")


# =========================
# Ações do menu
# =========================
def acao_calcular():
    print("\n-- Investimento --")
    valor = _input_float("Valor do aporte", 10000.0)
    data_aporte = _input_str("Data do aporte (AAAA-MM-DD ou DD/MM/AAAA)", date.today().isoformat())
    data_venc = _input_str("Data de vencimento", date(date.today().year + 1, date.today().month, 1).isoformat())
    erro = validar_dados_investimento(valor, data_aporte, data_venc)
    if erro:
        print(erro)
        return

    print("Modalidades: 1) Pré Fixado  2) Pós Fixado (% CDI)  3) IPCA+")
    op = _input_str("Modalidade", "1")
    campos = {}
    if op == "2":
        modalidade = Modalidade.POS_FIXADO
        campos["taxa_pos_cdi"] = _input_float("% do CDI", 100.0)
        campos["selic_atual"] = _input_float("Selic/CDI atual (% a.a.)", 10.5)
    elif op == "3":
        modalidade = Modalidade.IPCA
        campos["taxa_ipca"] = _input_float("Spread sobre IPCA (% a.a.)", 6.0)
        campos["ipca_atual"] = _input_float("IPCA atual (% a.a.)", 4.5)
    else:
        modalidade = Modalidade.PRE_FIXADO
        campos["taxa_pre_fixado"] = _input_float("Taxa pré-fixada (% a.a.)", 12.0)

    inv = InvestimentoInput(valor_aporte=valor, data_aporte=data_aporte,
                            data_vencimento=data_venc, modalidade=modalidade, **campos)
    feriados = set()
    if _input_bool("Considerar feriados nacionais?", settings.usar_feriados_nacionais):
        feriados = feriados_periodo(parse_data(data_aporte), parse_data(data_venc))

    res = calcular_rentabilidade(inv, feriados)
    if not res.ok:
        print(f"Não foi possível calcular: {res.erro}")
        return
    c = res.calculo
    print(f"\n{modalidade.value} – {descricao_taxa(inv)}")
    print(f"- Dias corridos: {c.dias_corridos} | Dias úteis: {c.dias_uteis}")
    i_aa = resolver_taxa_anual(inv)
    print(f"- Taxa: {i_aa*100:.4f}% a.a. = {aa_to_ad(i_aa, settings.dias_uteis_ano)*100:.6f}% ao dia útil")
    print(f"- Taxa efetiva no período: {c.taxa_efetiva*100:.4f}%")
    print(f"- Montante bruto: R$ {c.montante_bruto:,.2f} | Rendimento bruto: R$ {c.rendimento_bruto:,.2f}")
    print(f"- IOF: R$ {c.valor_iof:,.2f} | IR ({c.aliquota_ir:.1f}%): R$ {c.valor_ir:,.2f}")
    print(f"- Rendimento líquido: R$ {c.rendimento_liquido:,.2f}")


def acao_relatorio():
    print("\n-- Relatório da carteira --")
    csv_in = input("Caminho do CSV de investimentos: ").strip()
    if not csv_in:
        print("Informe um caminho de arquivo CSV.")
        return
    try:
        investimentos = carregar_csv(csv_in)
    except (OSError, ValueError) as e:
        print(f"Erro ao carregar investimentos: {e}")
        return

    linhas = calcular_carteira(investimentos)

    outdir = "saida_relatorio"
    os.makedirs(outdir, exist_ok=True)
    base = datetime.now().strftime("%Y%m%d_%H%M%S")
    csv_path = os.path.join(outdir, f"rentabilidade_{base}.csv")
    png_path = os.path.join(outdir, f"grafico_{base}.png")
    html_path = os.path.join(outdir, f"relatorio_{base}.html")
    pdf_path = os.path.join(outdir, f"relatorio_{base}.pdf")

    salvar_csv(csv_path, linhas)
    grafico_png(png_path, linhas)
    html_relatorio(html_path, linhas, png_path, csv_path)
    pdf_relatorio(pdf_path, linhas, png_path)

    tot = totais_carteira(linhas)
    print(f"\n{len(linhas)} investimentos | Aportado R$ {tot['valor_aporte']:,.2f} | "
          f"Rend. líquido R$ {tot['rendimento_liquido']:,.2f}")
    print("\nArquivos gerados:")
    print(f"• CSV:  {csv_path}")
    print(f"• PNG:  {png_path}")
    print(f"• HTML: {html_path}")
    print(f"• PDF:  {pdf_path}")


def acao_indices():
    print("Juros: 1) Selic meta (432)  2) Selic over (4189)  3) CDI over (4392)")
    fonte = {"1": "meta", "2": "overnight", "3": "cdi"}.get(_input_str("Fonte", "1"), "meta")
    m = fetch_indices(fonte)
    print(f"\nJuros ({m['selic_source']}): {m['selic_atual']:.2f}% a.a. (ref. {m['selic_data']})")
    print(f"IPCA 12m: {m['ipca_atual']:.2f}% a.a. (ref. {m['ipca_data']})")


# =========================
# Loop principal
# =========================
def main():
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    while True:
        menu()
        op = input("Escolha: ").strip()
        if op == "1":
            acao_calcular()
        elif op == "2":
            acao_relatorio()
        elif op == "3":
            acao_indices()
        elif op == "0":
            print("Até mais!")
            break
        else:
            print("Opção inválida.")


if __name__ == "__main__":
    main()
