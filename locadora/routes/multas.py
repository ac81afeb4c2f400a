"""
Rotas da API de Multas
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import multa_service

multas_bp = Blueprint('multas', __name__)


@multas_bp.route('', methods=['GET'])
def listar_multas():
    try:
        multas = multa_service.listar_multas(
            veiculo_id=request.args.get('veiculo_id', type=int),
            pago=ler_bool('pago')
        )
        return jsonify({'success': True, 'data': [m.to_dict() for m in multas], 'total': len(multas)}), 200
    except Exception as e:
        return erro_interno(e)


@multas_bp.route('', methods=['POST'])
def criar_multa():
    """
    Body (JSON):
        {"veiculo_id": int, "tipo_infracao": str, "valor": float,
         "data_infracao": "YYYY-MM-DD", "data_vencimento": "YYYY-MM-DD",
         "numero": str, "motorista_id": int, "contrato_id": int}
    """
    try:
        multa = multa_service.criar_multa(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': multa.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@multas_bp.route('/<int:multa_id>', methods=['PUT'])
def atualizar_multa(multa_id):
    try:
        multa = multa_service.atualizar_multa(multa_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': multa.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@multas_bp.route('/<int:multa_id>', methods=['DELETE'])
def excluir_multa(multa_id):
    try:
        multa_service.excluir_multa(multa_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Multa excluída'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
