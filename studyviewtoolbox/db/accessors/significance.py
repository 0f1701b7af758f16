"""Significance scores computed per study: MutSig genes and GISTIC regions."""

from studyviewtoolbox.db.database_connection import SimpleReadOnlyProvider
from studyviewtoolbox.db.exchange_data_formats.genes import Gistic
from studyviewtoolbox.db.exchange_data_formats.genes import GisticGene
from studyviewtoolbox.db.exchange_data_formats.genes import MutSig
from studyviewtoolbox.studyview.interfaces import SignificanceSource


class SignificanceAccess(SimpleReadOnlyProvider, SignificanceSource):
    def get_significantly_mutated_genes(self, study_id: str) -> list[MutSig]:
        query = '''
        SELECT ms.entrez_gene_id, g.hugo_gene_symbol, ms.p_value, ms.q_value
        FROM mut_sig ms
        JOIN cancer_study cs ON cs.cancer_study_id=ms.cancer_study_id
        LEFT JOIN gene g ON g.entrez_gene_id=ms.entrez_gene_id
        WHERE cs.cancer_study_identifier=%s
        ORDER BY ms.q_value, ms.entrez_gene_id
        ;
        '''
        self.cursor.execute(query, (study_id,))
        return [
            MutSig(entrez_gene_id=row[0], hugo_gene_symbol=row[1], p_value=row[2], q_value=row[3])
            for row in self.cursor.fetchall()
        ]

    def get_significant_copy_number_regions(self, study_id: str) -> list[Gistic]:
        query = '''
        SELECT gi.gistic_roi_id, gi.cytoband, gi.amp, gi.q_value, gg.entrez_gene_id,
            g.hugo_gene_symbol
        FROM gistic gi
        JOIN cancer_study cs ON cs.cancer_study_id=gi.cancer_study_id
        LEFT JOIN gistic_to_gene gg ON gg.gistic_roi_id=gi.gistic_roi_id
        LEFT JOIN gene g ON g.entrez_gene_id=gg.entrez_gene_id
        WHERE cs.cancer_study_identifier=%s
        ORDER BY gi.gistic_roi_id, gg.entrez_gene_id
        ;
        '''
        self.cursor.execute(query, (study_id,))
        rows_by_region: dict[int, list[tuple]] = {}
        for row in self.cursor.fetchall():
            rows_by_region.setdefault(row[0], []).append(row)
        regions = []
        for rows in rows_by_region.values():
            roi_id, cytoband, amp, q_value = rows[0][0:4]
            genes = [
                GisticGene(entrez_gene_id=row[4], hugo_gene_symbol=row[5])
                for row in rows
                if row[4] is not None
            ]
            regions.append(Gistic(
                gistic_roi_id=roi_id,
                cytoband=cytoband,
                amp=amp,
                q_value=q_value,
                genes=genes,
            ))
        return regions
