"""
Taxonomia única de categorias, origens e status

Todos os serviços e rotas consultam este módulo; nenhum outro arquivo
redefine listas de categorias ou rótulos.
"""
from __future__ import annotations


# Status compartilhados por Custo, ContaPagar e Salario
STATUS_PENDENTE = 'Pendente'
STATUS_AUTORIZADO = 'Autorizado'
STATUS_PAGO = 'Pago'
STATUS_VALIDOS = (STATUS_PENDENTE, STATUS_AUTORIZADO, STATUS_PAGO)

# Categorias aceitas pela tabela de custos (constraint do banco)
CATEGORIAS_CUSTO = (
    'Multa',
    'Funilaria',
    'Seguro',
    'Avulsa',
    'Compra',
    'Excesso Km',
    'Diária Extra',
    'Combustível',
    'Avaria',
    'Despesas',
)
CATEGORIA_CUSTO_PADRAO = 'Despesas'

# Categorias usadas em contas a pagar
CATEGORIA_SALARIO = 'Salário'
CATEGORIA_DESPESA_RECORRENTE = 'Despesa Recorrente'
CATEGORIAS_CONTA_PAGAR = (
    CATEGORIA_SALARIO,
    CATEGORIA_DESPESA_RECORRENTE,
    'Seguro',
    'Despesas',
    'Avulsa',
    'Compra',
    'Funilaria',
    'Combustível',
    'Multa',
)

# Categorias de conta a pagar que geram custo recorrente ao serem pagas
CATEGORIAS_RECORRENTES = (
    CATEGORIA_SALARIO,
    CATEGORIA_DESPESA_RECORRENTE,
    'Seguro',
    'Despesas',
)

CATEGORY_LABELS = {
    'Multa': 'Multa de trânsito',
    'Funilaria': 'Funilaria e pintura',
    'Seguro': 'Seguro',
    'Avulsa': 'Despesa avulsa',
    'Compra': 'Compra de peças/insumos',
    'Excesso Km': 'Excesso de quilometragem',
    'Diária Extra': 'Diária extra',
    'Combustível': 'Combustível',
    'Avaria': 'Avaria',
    'Despesas': 'Despesas gerais',
}

# Origem: quem/qual subsistema produziu o custo
ORIGEM_USUARIO = 'Usuario'
ORIGEM_PATIO = 'Patio'
ORIGEM_MANUTENCAO = 'Manutencao'
ORIGEM_SISTEMA = 'Sistema'
ORIGEM_COMPRAS = 'Compras'
ORIGEM_FINANCEIRO = 'Financeiro'
ORIGENS = (
    ORIGEM_USUARIO,
    ORIGEM_PATIO,
    ORIGEM_MANUTENCAO,
    ORIGEM_SISTEMA,
    ORIGEM_COMPRAS,
    ORIGEM_FINANCEIRO,
)

# Origens das projeções virtuais (multas, danos, abastecimentos)
ORIGEM_MULTAS = 'Multas'
ORIGEM_DANOS = 'Danos'
ORIGEM_ABASTECIMENTO = 'Abastecimento'

ORIGIN_LABELS = {
    ORIGEM_USUARIO: 'Lançamento manual',
    ORIGEM_PATIO: 'Controle de pátio',
    ORIGEM_MANUTENCAO: 'Manutenção',
    ORIGEM_SISTEMA: 'Sistema',
    ORIGEM_COMPRAS: 'Compras',
    ORIGEM_FINANCEIRO: 'Financeiro',
    ORIGEM_MULTAS: 'Multas',
    ORIGEM_DANOS: 'Danos',
    ORIGEM_ABASTECIMENTO: 'Abastecimento',
}

# Tipos aceitos em Custo.referencia_origem_tipo
TIPOS_REFERENCIA_ORIGEM = (
    'service_note',
    'manual',
    'finance',
    'inspection',
    'recurring',
    'conta_pagar',
    'salario',
)
TIPO_REFERENCIA_PADRAO = 'service_note'

# Origem de uma conta a pagar
ORIGEM_CONTA_SALARIO = CATEGORIA_SALARIO
ORIGEM_CONTA_RECORRENTE = CATEGORIA_DESPESA_RECORRENTE
ORIGEM_CONTA_CUSTO = 'Custo'
ORIGEM_CONTA_MANUAL = 'Manual'

TIPOS_RECORRENCIA = ('monthly', 'weekly', 'yearly')


def mapear_categoria_custo(categoria: str | None) -> str:
    """
    Traduz a categoria de uma conta a pagar para uma categoria aceita
    na tabela de custos. Categorias desconhecidas viram 'Despesas'.
    """
    if categoria == CATEGORIA_DESPESA_RECORRENTE:
        return CATEGORIA_CUSTO_PADRAO
    if categoria in CATEGORIAS_CUSTO:
        return categoria
    return CATEGORIA_CUSTO_PADRAO


def gera_custo_recorrente(categoria: str | None) -> bool:
    return categoria in CATEGORIAS_RECORRENTES


def normalizar_tipo_referencia(tipo) -> str | None:
    if tipo is None or tipo == '':
        return None
    if not isinstance(tipo, str) or tipo not in TIPOS_REFERENCIA_ORIGEM:
        return TIPO_REFERENCIA_PADRAO
    return tipo
