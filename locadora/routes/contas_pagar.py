"""
Rotas da API de Contas a Pagar

Cada operação de escrita faz um único commit; qualquer erro desfaz tudo
(inclusive custo criado e próxima conta recorrente no pagamento).
"""
from datetime import date

from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_payload_request
from locadora.services import conta_pagar_service

contas_pagar_bp = Blueprint('contas_pagar', __name__)


@contas_pagar_bp.route('', methods=['GET'])
def listar_contas():
    """
    Query params:
        status, categoria, origem_tipo
    """
    try:
        contas = conta_pagar_service.listar(
            status=request.args.get('status'),
            categoria=request.args.get('categoria'),
            origem_tipo=request.args.get('origem_tipo')
        )
        hoje = date.today()
        return jsonify({
            'success': True,
            'data': [c.to_dict(hoje) for c in contas],
            'total': len(contas)
        }), 200
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('/<int:conta_id>', methods=['GET'])
def buscar_conta(conta_id):
    try:
        conta = conta_pagar_service.obter(conta_id)
        return jsonify({'success': True, 'data': conta.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('', methods=['POST'])
def criar_conta():
    """
    Lança conta avulsa

    Body (JSON):
        {
            "descricao": "string",
            "valor": float,
            "data_vencimento": "YYYY-MM-DD",
            "categoria": "string" (opcional, padrão Avulsa),
            "fornecedor", "documento_ref", "forma_pagamento" (opcionais)
        }
    """
    try:
        conta = conta_pagar_service.criar_avulsa(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'message': 'Conta a pagar criada', 'data': conta.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('/<int:conta_id>/autorizar', methods=['POST'])
def autorizar_conta(conta_id):
    try:
        conta = conta_pagar_service.autorizar(conta_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Conta autorizada', 'data': conta.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('/<int:conta_id>/pagar', methods=['POST'])
def pagar_conta(conta_id):
    """
    Marca a conta como paga

    Body (JSON, opcional):
        {"data_pagamento": "YYYY-MM-DD"}

    Returns:
        JSON com a conta, o custo do pagamento e a próxima conta (se gerada)
    """
    try:
        dados = ler_payload_request()
        conta, custo, proxima = conta_pagar_service.marcar_como_paga(
            conta_id, data_pagamento=dados.get('data_pagamento')
        )
        db.session.commit()
        return jsonify({
            'success': True,
            'message': 'Conta marcada como paga',
            'data': {
                'conta': conta.to_dict(),
                'custo': custo.to_dict() if custo else None,
                'proxima_conta': proxima.to_dict() if proxima else None
            }
        }), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('/<int:conta_id>/status', methods=['PUT'])
def alterar_status_conta(conta_id):
    try:
        dados = ler_payload_request()
        conta = conta_pagar_service.alterar_status(conta_id, dados.get('status'))
        db.session.commit()
        return jsonify({'success': True, 'data': conta.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@contas_pagar_bp.route('/<int:conta_id>', methods=['DELETE'])
def excluir_conta(conta_id):
    try:
        conta_pagar_service.excluir(conta_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Conta excluída'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
