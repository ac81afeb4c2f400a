"""
Rotas da API de Abastecimentos
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_payload_request
from locadora.services import abastecimento_service

abastecimentos_bp = Blueprint('abastecimentos', __name__)


@abastecimentos_bp.route('', methods=['GET'])
def listar_abastecimentos():
    try:
        registros = abastecimento_service.listar_abastecimentos(
            veiculo_id=request.args.get('veiculo_id', type=int)
        )
        return jsonify({'success': True, 'data': [r.to_dict() for r in registros], 'total': len(registros)}), 200
    except Exception as e:
        return erro_interno(e)


@abastecimentos_bp.route('', methods=['POST'])
def criar_abastecimento():
    try:
        abastecimento = abastecimento_service.criar_abastecimento(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': abastecimento.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
