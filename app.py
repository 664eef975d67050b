# app.py
from __future__ import annotations
import os, tempfile
from datetime import date, datetime, timedelta

import matplotlib.pyplot as plt
import streamlit as st

# Módulos do projeto
from config import settings
from services.bcb_api import fetch_indices
from services.registros import carregar_csv, validar_dados_investimento
from finance.datas import feriados_periodo
from finance.modelos import InvestimentoInput, Modalidade
from finance.products import descricao_taxa, resolver_taxa_anual
from finance.rentabilidade import calcular_rentabilidade
from finance.tvm import aa_to_ad
from simulate import calcular_carteira, totais_carteira
from report.report import df_clientes, df_investimentos, pct_ou_traco, salvar_csv, grafico_png, html_relatorio, pdf_relatorio

st.set_page_config(page_title="Rentabilidade de Renda Fixa", layout="wide")


# ===================== helpers =====================
def fig_carteira(linhas: list[dict]):
    plt.figure()
    nomes = [l["cliente"] or "-" for l in linhas]
    plt.bar(nomes, [l["rendimento_bruto"] for l in linhas], label="Bruto")
    plt.bar(nomes, [l["rendimento_liquido"] for l in linhas], label="Líquido")
    plt.title("Rendimento no vencimento")
    plt.ylabel("R$"); plt.xticks(rotation=45, ha="right")
    plt.legend(); plt.tight_layout()
    return plt.gcf()


# ===================== layout geral =====================
st.title("🧮 Rentabilidade de Renda Fixa")
st.caption("Dias úteis (base 252), IR regressivo, IOF regressivo e indexadores via API SGS/BCB.")

with st.sidebar:
    st.header("⚙️ Preferências")
    fonte_juros = st.radio("Juros (pós-fixado)", ["meta", "overnight", "cdi"],
                           format_func={"meta": "Selic meta (432)", "overnight": "Selic over (4189)",
                                        "cdi": "CDI over (4392)"}.get)
    usar_feriados = st.toggle("Considerar feriados nacionais", value=settings.usar_feriados_nacionais)
    st.divider()
    if st.button("🔄 Atualizar indexadores do SGS"):
        st.session_state["_refresh_rates"] = True

if "_market" not in st.session_state or st.session_state.get("_refresh_rates"):
    try:
        st.session_state["_market"] = fetch_indices(fonte_juros)
    except Exception as e:
        st.warning(f"Não foi possível consultar o SGS: {e}")
        # sem indexador: pós-fixado e IPCA+ voltam como campo ausente
        st.session_state["_market"] = {"selic_atual": None, "selic_data": "-", "selic_source": "-",
                                       "ipca_atual": None, "ipca_data": "-"}
    st.session_state["_refresh_rates"] = False

market = st.session_state["_market"]
col1, col2 = st.columns(2)
col1.metric(f"Juros ({market['selic_source']}) (a.a.)", pct_ou_traco(market["selic_atual"]), market["selic_data"])
col2.metric("IPCA 12m (a.a.)", pct_ou_traco(market["ipca_atual"]), market["ipca_data"])

tabs = st.tabs(["💰 Investimento", "📑 Carteira (CSV)"])

# ===================== Tab 1: Investimento =====================
with tabs[0]:
    st.subheader("Calcular rentabilidade")
    with st.form("inv_form"):
        c1, c2, c3 = st.columns(3)
        valor = c1.number_input("Valor do aporte (R$)", min_value=0.0, value=10000.0, step=100.0)
        data_aporte = c2.date_input("Data do aporte", value=date.today())
        data_venc = c3.date_input("Vencimento", value=date.today() + timedelta(days=365))

        modalidade = st.radio("Modalidade", [m.value for m in Modalidade], horizontal=True)
        d1, d2, d3 = st.columns(3)
        taxa_pre = d1.number_input("Pré Fixado (% a.a.)", min_value=0.0, value=12.0, step=0.1)
        taxa_cdi = d2.number_input("Pós Fixado (% do CDI)", min_value=0.0, value=100.0, step=5.0)
        taxa_ipca = d3.number_input("IPCA+ (spread % a.a.)", min_value=0.0, value=6.0, step=0.1)
        submitted = st.form_submit_button("Calcular")

    if submitted:
        erro = validar_dados_investimento(valor, data_aporte, data_venc)
        if erro:
            st.error(erro)
        else:
            m = Modalidade(modalidade)
            inv = InvestimentoInput(
                valor_aporte=valor, data_aporte=data_aporte, data_vencimento=data_venc, modalidade=m,
                taxa_pre_fixado=taxa_pre if m is Modalidade.PRE_FIXADO else None,
                taxa_pos_cdi=taxa_cdi if m is Modalidade.POS_FIXADO else None,
                taxa_ipca=taxa_ipca if m is Modalidade.IPCA else None,
                selic_atual=market["selic_atual"], ipca_atual=market["ipca_atual"],
            )
            feriados = feriados_periodo(data_aporte, data_venc) if usar_feriados else set()
            res = calcular_rentabilidade(inv, feriados)
            if not res.ok:
                st.error(f"Não foi possível calcular: {res.erro}")
            else:
                c = res.calculo
                st.success(f"{m.value} – {descricao_taxa(inv)}")
                i_aa = resolver_taxa_anual(inv)
                st.caption(f"{i_aa*100:.2f}% a.a. = {aa_to_ad(i_aa, settings.dias_uteis_ano)*100:.4f}% ao dia útil")
                k1, k2, k3, k4 = st.columns(4)
                k1.metric("Dias corridos / úteis", f"{c.dias_corridos} / {c.dias_uteis}")
                k2.metric("Rendimento bruto", f"R$ {c.rendimento_bruto:,.2f}", f"{c.taxa_efetiva*100:.2f}%")
                k3.metric(f"IR ({c.aliquota_ir:.1f}%) + IOF", f"R$ {c.valor_ir + c.valor_iof:,.2f}")
                k4.metric("Rendimento líquido", f"R$ {c.rendimento_liquido:,.2f}")

# ===================== Tab 2: Carteira =====================
with tabs[1]:
    st.subheader("Carteira a partir de CSV")
    up = st.file_uploader("CSV com colunas do cadastro (valoraporte, dataaporte, datavencimento, modalidade, ...)",
                          type=["csv"])
    if up:
        try:
            investimentos = carregar_csv(up)
        except Exception as e:
            st.error(f"Erro ao ler CSV: {e}")
            investimentos = []

        if investimentos:
            linhas = calcular_carteira(investimentos, None if usar_feriados else set())
            tot = totais_carteira(linhas)
            t1, t2, t3 = st.columns(3)
            t1.metric("Total aportado", f"R$ {tot['valor_aporte']:,.2f}")
            t2.metric("Rendimento líquido", f"R$ {tot['rendimento_liquido']:,.2f}")
            t3.metric("Patrimônio líquido", f"R$ {tot['patrimonio_liquido']:,.2f}")
            st.markdown("**Por cliente**")
            st.dataframe(df_clientes(linhas), use_container_width=True)
            st.dataframe(df_investimentos(linhas), use_container_width=True)
            st.pyplot(fig_carteira(linhas))

            with tempfile.TemporaryDirectory() as tmp:
                base = datetime.now().strftime("%Y%m%d_%H%M%S")
                csv_path = os.path.join(tmp, f"rentabilidade_{base}.csv")
                png_path = os.path.join(tmp, f"grafico_{base}.png")
                html_path = os.path.join(tmp, f"relatorio_{base}.html")
                pdf_path = os.path.join(tmp, f"relatorio_{base}.pdf")

                salvar_csv(csv_path, linhas)
                grafico_png(png_path, linhas)
                html_relatorio(html_path, linhas, png_path, csv_path)
                pdf_relatorio(pdf_path, linhas, png_path)

                csv_bytes = open(csv_path, "rb").read()
                html_bytes = open(html_path, "rb").read()
                pdf_bytes = open(pdf_path, "rb").read()

            cdl1, cdl2, cdl3 = st.columns(3)
            cdl1.download_button("⬇️ CSV", data=csv_bytes, file_name=f"rentabilidade_{base}.csv", mime="text/csv")
            cdl2.download_button("⬇️ HTML", data=html_bytes, file_name=f"relatorio_{base}.html", mime="text/html")
            cdl3.download_button("⬇️ PDF", data=pdf_bytes, file_name=f"relatorio_{base}.pdf", mime="application/pdf")
