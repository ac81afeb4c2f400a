"""
Serviço de Salários - ponte entre folha de pagamento e livro de custos

Cada salário lançado gera, na mesma transação:
1. Um custo recorrente mensal (origem Usuario)
2. Uma conta a pagar 'Salário' espelhando esse custo (referencia_origem_id)

Ao pagar a conta, o custo espelhado passa a Pago; nenhum custo novo é criado.
"""
import logging
from datetime import date

from locadora.categorias import (
    CATEGORIA_SALARIO,
    ORIGEM_CONTA_SALARIO,
    ORIGEM_USUARIO,
    STATUS_PAGO,
    STATUS_PENDENTE,
    STATUS_VALIDOS,
    mapear_categoria_custo,
)
from locadora.models import db, ContaPagar, Custo, Funcionario, Salario
from locadora.services.custo_service import CustoService
from locadora.services.datas import dia_no_mes, parse_date, parse_mes, to_decimal

logger = logging.getLogger(__name__)


class SalarioService:
    """
    Serviço para gerenciamento de salários
    """

    @staticmethod
    def obter_salario(salario_id):
        salario = db.session.get(Salario, salario_id)
        if not salario:
            raise ValueError('Salário não encontrado')
        return salario

    @staticmethod
    def listar_salarios(mes=None, funcionario_id=None, status=None):
        query = Salario.query
        if mes:
            inicio = parse_mes(mes)
            if not inicio:
                raise ValueError('Mês inválido (use YYYY-MM)')
            query = query.filter(Salario.mes_referencia == inicio)
        if funcionario_id:
            query = query.filter(Salario.funcionario_id == funcionario_id)
        if status:
            query = query.filter(Salario.status == status)
        return query.order_by(Salario.mes_referencia.desc(), Salario.data_pagamento.asc()).all()

    @staticmethod
    def criar_salario(dados, usuario=None):
        """
        Lança um salário com seu custo recorrente e sua conta a pagar

        Args:
            dados (dict):
                - funcionario_id (int)
                - valor (float)
                - data_pagamento (str YYYY-MM-DD)
                - mes_referencia (str YYYY-MM, opcional; padrão mês do pagamento)
                - status (str, opcional; padrão 'Pendente')
            usuario (Funcionario, opcional): Responsável pelo lançamento

        Returns:
            Salario: Salário criado (custo_id e conta_pagar_id preenchidos)

        Raises:
            ValueError: Se dados inválidos
        """
        funcionario_id = dados.get('funcionario_id')
        funcionario = db.session.get(Funcionario, int(funcionario_id)) if funcionario_id else None
        if not funcionario:
            raise ValueError('Funcionário não encontrado')

        valor = to_decimal(dados.get('valor'))
        if valor is None or valor <= 0:
            raise ValueError('Valor deve ser maior que zero')

        data_pagamento = parse_date(dados.get('data_pagamento'))
        if not data_pagamento:
            raise ValueError('data_pagamento inválida (use YYYY-MM-DD)')

        mes_referencia = parse_mes(dados.get('mes_referencia') or data_pagamento)
        if not mes_referencia:
            raise ValueError('mes_referencia inválido (use YYYY-MM)')

        status = dados.get('status') or STATUS_PENDENTE
        if status not in STATUS_VALIDOS:
            raise ValueError('Status inválido')

        salario = Salario(
            funcionario_id=funcionario.id,
            valor=valor,
            data_pagamento=data_pagamento,
            status=status,
            mes_referencia=mes_referencia
        )
        db.session.add(salario)
        db.session.flush()

        mes_texto = mes_referencia.strftime('%m/%Y')
        responsavel = usuario.nome if usuario else 'Sistema'
        custo = CustoService.criar_custo_recorrente({
            'categoria': mapear_categoria_custo(CATEGORIA_SALARIO),
            'descricao': f'Salário - {funcionario.nome} - {mes_texto}',
            'valor': valor,
            'data_custo': data_pagamento,
            'status': status,
            'origem': ORIGEM_USUARIO,
            'departamento': 'Financeiro',
            'criado_por_funcionario_id': usuario.id if usuario else None,
            'criado_por_nome': responsavel,
            'observacoes': (
                f'Salário registrado via Financeiro | Funcionário: {funcionario.nome} '
                f'({funcionario.cargo or "-"}) | Mês de referência: {mes_texto} | '
                f'Responsável pelo lançamento: {responsavel}'
            ),
            'referencia_origem_id': salario.id,
            'referencia_origem_tipo': 'salario',
            'tipo_recorrencia': 'monthly',
            'dia_recorrencia': data_pagamento.day,
        })

        conta = ContaPagar(
            descricao=f'Salário - {funcionario.nome} - {mes_texto}',
            valor=valor,
            data_vencimento=data_pagamento,
            data_pagamento=data_pagamento if status == STATUS_PAGO else None,
            categoria=CATEGORIA_SALARIO,
            status=status,
            origem_tipo=ORIGEM_CONTA_SALARIO,
            referencia_origem_id=custo.id,
            custo_id=custo.id if status == STATUS_PAGO else None,
            salario_id=salario.id
        )
        db.session.add(conta)
        db.session.flush()

        salario.custo_id = custo.id
        salario.conta_pagar_id = conta.id
        db.session.add(salario)

        logger.info('Salário %s lançado para %s (%s)', salario.id, funcionario.nome, mes_texto)
        return salario

    @staticmethod
    def atualizar_salario(salario_id, dados):
        """
        Atualiza o salário; mudança de status é replicada no custo e na conta
        vinculados. Vínculos ausentes apenas geram aviso.
        """
        salario = SalarioService.obter_salario(salario_id)

        if 'valor' in dados:
            valor = to_decimal(dados['valor'])
            if valor is None or valor <= 0:
                raise ValueError('Valor deve ser maior que zero')
            salario.valor = valor
        if 'data_pagamento' in dados:
            data_pagamento = parse_date(dados['data_pagamento'])
            if not data_pagamento:
                raise ValueError('data_pagamento inválida (use YYYY-MM-DD)')
            salario.data_pagamento = data_pagamento
        if 'mes_referencia' in dados:
            mes = parse_mes(dados['mes_referencia'])
            if not mes:
                raise ValueError('mes_referencia inválido (use YYYY-MM)')
            salario.mes_referencia = mes

        novo_status = dados.get('status')
        if novo_status is not None:
            if novo_status not in STATUS_VALIDOS:
                raise ValueError('Status inválido')
            salario.status = novo_status
            SalarioService._propagar_status(salario, novo_status)

        db.session.add(salario)
        return salario

    @staticmethod
    def _propagar_status(salario, status):
        custo = db.session.get(Custo, salario.custo_id) if salario.custo_id else None
        if custo is None:
            logger.warning('Salário %s sem custo vinculado; status não replicado', salario.id)
        else:
            custo.status = status
            db.session.add(custo)

        conta = db.session.get(ContaPagar, salario.conta_pagar_id) if salario.conta_pagar_id else None
        if conta is None:
            logger.warning('Salário %s sem conta a pagar vinculada; status não replicado', salario.id)
            return
        conta.status = status
        if status == STATUS_PAGO:
            conta.data_pagamento = conta.data_pagamento or date.today()
            if custo is not None:
                conta.custo_id = custo.id
        db.session.add(conta)

    @staticmethod
    def excluir_salario(salario_id):
        """Exclui o salário; custo e conta permanecem como histórico."""
        salario = SalarioService.obter_salario(salario_id)
        ContaPagar.query.filter_by(salario_id=salario.id).update(
            {ContaPagar.salario_id: None}, synchronize_session=False
        )
        db.session.delete(salario)

    @staticmethod
    def gerar_salarios_mes(mes):
        """
        Lança o salário do mês para cada funcionário ativo com salário base

        Idempotente: funcionários que já têm salário no mês são ignorados.

        Returns:
            int: Quantidade de salários criados
        """
        inicio = parse_mes(mes)
        if not inicio:
            raise ValueError('Mês inválido (use YYYY-MM)')

        funcionarios = Funcionario.query.filter(
            Funcionario.ativo.is_(True),
            Funcionario.salario_base.isnot(None),
            Funcionario.salario_base > 0
        ).order_by(Funcionario.nome).all()

        criados = 0
        for funcionario in funcionarios:
            existe = Salario.query.filter_by(funcionario_id=funcionario.id, mes_referencia=inicio).first()
            if existe:
                continue
            SalarioService.criar_salario({
                'funcionario_id': funcionario.id,
                'valor': funcionario.salario_base,
                'data_pagamento': dia_no_mes(inicio, funcionario.dia_pagamento or 5),
                'mes_referencia': inicio,
            })
            criados += 1

        logger.info('Salários de %s: %d lançado(s)', inicio.strftime('%m/%Y'), criados)
        return criados
