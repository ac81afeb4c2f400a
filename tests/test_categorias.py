import pytest

from locadora.categorias import (
    CATEGORIAS_CONTA_PAGAR,
    CATEGORIAS_CUSTO,
    gera_custo_recorrente,
    mapear_categoria_custo,
    normalizar_tipo_referencia,
)


@pytest.mark.parametrize('categoria, esperado', [
    ('Despesa Recorrente', 'Despesas'),
    ('Salário', 'Despesas'),
    ('Seguro', 'Seguro'),
    ('Multa', 'Multa'),
    ('Combustível', 'Combustível'),
    ('Categoria Inventada', 'Despesas'),
    ('', 'Despesas'),
    (None, 'Despesas'),
])
def test_mapear_categoria_custo(categoria, esperado):
    assert mapear_categoria_custo(categoria) == esperado


def test_mapeamento_sempre_cai_na_lista_de_custos():
    for categoria in CATEGORIAS_CONTA_PAGAR:
        assert mapear_categoria_custo(categoria) in CATEGORIAS_CUSTO


def test_categorias_que_geram_custo_recorrente():
    assert gera_custo_recorrente('Salário')
    assert gera_custo_recorrente('Despesa Recorrente')
    assert gera_custo_recorrente('Seguro')
    assert gera_custo_recorrente('Despesas')
    assert not gera_custo_recorrente('Avulsa')
    assert not gera_custo_recorrente('Compra')


def test_normalizar_tipo_referencia():
    assert normalizar_tipo_referencia(None) is None
    assert normalizar_tipo_referencia('') is None
    assert normalizar_tipo_referencia('inspection') == 'inspection'
    assert normalizar_tipo_referencia('qualquer_coisa') == 'service_note'
